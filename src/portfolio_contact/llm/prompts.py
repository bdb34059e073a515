"""Prompt templates for the contact pipeline's two model calls.

Templates use Python string placeholders ({variable_name}); literal braces in
the JSON example are doubled.
"""

from portfolio_contact.llm.models import IntentLabel

INTENT_CLASSIFICATION_PROMPT = """Analyze the following message sent through a personal \
portfolio website and determine its intent.
Is it a job offer, a collaboration request, a question, or something else?

<message>
{message}
</message>

Respond with just one word: job, collaboration, question, or other."""

# Per-intent subject template and tone guidance for the reply.
INTENT_REPLY_GUIDANCE: dict[IntentLabel, tuple[str, str]] = {
    IntentLabel.JOB: (
        "Re: Your job opportunity - Thank you, {sender_name}!",
        "Express genuine enthusiasm about the opportunity while staying professional, "
        "and suggest scheduling a short meeting or call to discuss the role.",
    ),
    IntentLabel.COLLABORATION: (
        "Re: Collaboration proposal - Let's talk, {sender_name}",
        "Show real interest in the proposed collaboration and ask to learn more "
        "about the project, its goals, and timeline.",
    ),
    IntentLabel.QUESTION: (
        "Re: Your question - Thanks for asking, {sender_name}",
        "Acknowledge their interest in the work, confirm the question was received, "
        "and offer to follow up with more detail.",
    ),
    IntentLabel.OTHER: (
        "Thank you for reaching out, {sender_name}!",
        "Give a friendly, generic acknowledgment that the message was received "
        "and will be read personally.",
    ),
}

REPLY_COMPOSITION_PROMPT = """You are assisting a recent Computer Science graduate in \
writing a confirmation email to someone who contacted them through their personal website. \
Create a warm, professional email that acknowledges the message and sets the right tone for \
future communication.

PERSONAL INFORMATION:
- Name: {owner_name}
- Email: {owner_email}
- Phone: {owner_phone}
- LinkedIn: {linkedin_url}
- GitHub: {github_url}

INQUIRY:
- From: {sender_name}
- Email: {sender_email}
- Intent: {intent}
- Message:
<message>
{message}
</message>

SUBJECT LINE: follow this template, adapting it to the message if helpful:
{subject_template}

TONE: {tone_guidance}

RULES:
- Keep it concise, friendly, and personal rather than automated-sounding.
- Greet the sender by name.
- Do not promise anything specific on the owner's behalf (dates, rates, commitments).
- End the HTML with exactly this sign-off and nothing after it: {sign_off_marker}
- The HTML must be a complete, self-contained email body with inline styling.

Respond with ONLY a JSON object with two string fields and no other text:
{{
  "subject": "Your subject line here",
  "html": "Your HTML email content here"
}}"""
