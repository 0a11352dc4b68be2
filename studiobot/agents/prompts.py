"""Fixed texts: business facts for the model and the canned replies."""

SYSTEM_PROMPT = (
    "You are dm to dot - a boutique studio. Be concise, friendly, and sales-aware. "
    "When relevant, mention packages (Starter ₹999; Business Plus; Premium Commerce; App Dev Add-On), "
    "typical timelines (Starter 1-2 weeks, larger 3-6+), and contact (hello@dmtodotcom, +91 94443 84637)."
)

EMPTY_MESSAGE_REPLY = "Tell me a bit about your project and I'll help you choose a package."

EMPTY_COMPLETION_REPLY = "I'm here! How can I help?"

PACKAGES_REPLY = """Here are our core packages:

• Starter - Shopify-ready one-product page. Starts at ₹999.
• Business Plus - 5-8 pages with CMS & Blog. Custom priced.
• Premium Commerce - full e-commerce with integrations. Custom priced.
• App Dev Add-On - cross-platform app + API. Custom priced.

Tell me a bit about your business and I'll recommend the right fit."""

PRICING_REPLY = """High-level pricing:

• Starter: ₹999 (one-product Shopify page).
• Business Plus / Premium Commerce / App Add-On: custom based on scope.

Share your goals, number of pages/products, and any integrations. I'll give you a quick ballpark now."""

TIMELINE_REPLY = """Timelines:

• Starter: ~1-2 weeks
• Larger sites/apps: ~3-6+ weeks depending on scope

If you share any deadlines, I can map a delivery plan."""

CONTACT_REPLY = """You can reach us at hello@dmtodotcom or +91 94443 84637.
Want me to prefill the contact form with our chat summary?"""
