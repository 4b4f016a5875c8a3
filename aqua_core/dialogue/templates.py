"""
Canned assistant responses.

Bracketed fields such as [Location] are left for the user to fill in by hand.
`$name` slots are filled by the ResponseTemplater from the turn context.
"""

GREETING = (
    "Hello! I'm Aqua AI, your digital water guardian. I can help you understand "
    "pollution metrics, draft complaint messages, explain safety measures, and "
    "answer questions about water quality. How can I assist you today?"
)

QUICK_ACTIONS = (
    "Explain my area's pollution level",
    "Draft a complaint email",
    "What safety measures should I take?",
    "How do I read the metrics?",
)

POLLUTION_LEVEL = (
    "Based on recent data, pollution levels vary across regions. I can see from our "
    "latest reports that areas with high plastic density (70+) require immediate "
    "attention. Would you like me to analyze a specific location? Just provide the "
    "coordinates or location name."
)

LOCATION_SUMMARY = (
    "At $location_name, the plastic density index is $density ($band risk). "
    "Water clarity is $clarity and the pollution trend is $trend."
)

COMPLAINT_EMAIL = """Here's a template you can use:

Subject: Urgent: Pollution Report at [Location]

Dear [Authority Name],

I am writing to report a pollution incident observed at [Location, Coordinates]. On [Date], I noticed [describe what you saw - plastic accumulation, oil spill, sewage discharge, etc.].

This poses a serious risk to [water quality/marine life/public health]. I have documented the incident with photographs and submitted a report through AquaSentinel (Report ID: [Report ID]).

I kindly request immediate investigation and appropriate action to address this issue.

Thank you for your attention to this matter.

Sincerely,
[Your Name]

Would you like me to customize this for a specific organization?"""

ORGANIZATION_CONTACT = "You can send it to $organization_name ($organization_email)."

SAFETY = """For personal safety around polluted water:

1. Avoid direct contact with visibly contaminated water
2. Use certified water filters for drinking water
3. Wash hands thoroughly if contact occurs
4. Keep children and pets away from polluted areas
5. Report any suspicious discharge immediately

For specific guidance based on pollution type (chemical, oil, sewage, plastic), which would you like to know more about?"""

METRICS = """Let me explain our key metrics:

• Plastic Density Index (0-100): Measures plastic particle concentration. 0-30 is Low, 30-50 is Moderate, 50-70 is High, 70+ is Critical.

• Water Clarity: Visual assessment - Clear (minimal contamination), Moderate (visible particles), Poor (significant pollution).

• Microplastic Count: Particles per cubic meter of water.

• Pollution Trend: Rising (getting worse), Stable (unchanged), Declining (improving).

Which metric would you like more details about?"""

REPORT_SUBMISSION = """To submit a pollution report:

1. Go to the Community Reporting Hub
2. Your GPS location will auto-populate (or manually enter coordinates)
3. Select pollution category (Plastic, Chemical, Oil, Sewage)
4. Describe what you observed
5. Estimate plastic density and water clarity
6. Submit (anonymous reporting is available)

Your report helps authorities respond faster and builds our community database. Every report matters!"""

PREDICTION = """Our AI prediction system analyzes:

• Weather patterns (rainfall increases plastic runoff)
• Waste hotspot proximity
• Historical pollution trends
• Seasonal factors

Check the AI Insights section for risk forecasts in different regions. We update predictions daily based on new data. Would you like me to explain a specific prediction?"""

FALLBACK = """I'm here to help you understand pollution data and take action. I can:

• Summarize pollution reports for any location
• Explain complex metrics in simple terms
• Draft complaint messages to authorities
• Suggest personal safety actions
• Guide you through using AquaSentinel features

What would you like to know more about?"""
