"""Response Templater — renders canned responses with optional context."""

from string import Template
from typing import Dict, Optional

from aqua_core.classification.classifier import classify_density
from aqua_core.dialogue import templates
from aqua_core.models.dialogue import ResponseContext


class ResponseTemplater:
    """
    Fills `$name` slots from the turn context and leaves everything else alone.

    Bracketed placeholders ([Location], [Date], [Your Name], ...) are user-facing
    and never auto-filled. Slots with no value stay as written.
    """

    def render(self, template: str, values: Optional[Dict[str, object]] = None) -> str:
        return Template(template).safe_substitute(values or {})

    def context_values(self, context: Optional[ResponseContext]) -> Dict[str, object]:
        """Flatten the context into template slot values."""
        if context is None:
            return {}
        values: Dict[str, object] = {}
        if context.metric is not None:
            metric = context.metric
            values.update(
                location_name=metric.location_name,
                density=metric.plastic_density_index,
                band=classify_density(metric.plastic_density_index).band.value,
                clarity=metric.water_clarity_level,
                trend=metric.pollution_trend,
            )
        if context.organization is not None:
            org = context.organization
            values.update(
                organization_name=org.name,
                organization_email=org.email or "no email on file",
            )
        return values

    def render_pollution_level(self, context: Optional[ResponseContext]) -> str:
        if context is None or context.metric is None:
            return templates.POLLUTION_LEVEL
        summary = self.render(templates.LOCATION_SUMMARY, self.context_values(context))
        return f"{summary}\n\n{templates.POLLUTION_LEVEL}"

    def render_complaint(self, context: Optional[ResponseContext]) -> str:
        if context is None or context.organization is None:
            return templates.COMPLAINT_EMAIL
        contact = self.render(templates.ORGANIZATION_CONTACT, self.context_values(context))
        return f"{templates.COMPLAINT_EMAIL}\n\n{contact}"
