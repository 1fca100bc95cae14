import html
import re
from typing import Dict, Optional, Any
from pydantic import BaseModel


class EmailContext(BaseModel):
    """Template variables. Field names match the ``{{placeholder}}`` names."""
    candidateName: str = ""
    jobTitle: str = ""
    companyName: str = ""
    applicationUrl: str = ""
    assessmentUrl: str = ""
    adminUrl: str = ""
    aiScore: Optional[float] = None
    reason: str = ""


class EmailTemplate(BaseModel):
    name: str
    subject: str
    html_content: str
    text_content: str


class RenderedEmail(BaseModel):
    template_name: str
    subject: str
    html: str
    text: str


DEFAULT_TEMPLATES: Dict[str, EmailTemplate] = {
    'application_confirmation': EmailTemplate(
        name='application_confirmation',
        subject='Application Received - {{jobTitle}}',
        html_content="""
<h2>Thank you for your application!</h2>
<p>Hi {{candidateName}},</p>
<p>We've received your application for the <strong>{{jobTitle}}</strong> position at {{companyName}}.</p>
<p>What happens next:</p>
<ul>
  <li>Our team will review your application</li>
  <li>If selected, you'll receive an assessment invitation</li>
  <li>We'll keep you updated throughout the process</li>
</ul>
<p>You can track your application status at: <a href="{{applicationUrl}}">View Application</a></p>
<p>Thank you for your interest in joining our team!</p>
""",
        text_content="Thank you for your application for {{jobTitle}} at {{companyName}}. "
                     "We'll review it and get back to you soon. Track it at: {{applicationUrl}}",
    ),
    'assessment_invitation': EmailTemplate(
        name='assessment_invitation',
        subject='Complete Your Writing Assessment - {{jobTitle}}',
        html_content="""
<h2>Next Step: Writing Assessment</h2>
<p>Hi {{candidateName}},</p>
<p>Great news! We'd like to move forward with your application for <strong>{{jobTitle}}</strong>.</p>
<p>The next step is to complete a writing assessment. This will help us evaluate your writing skills.</p>
<p><a href="{{assessmentUrl}}" style="background-color: #2563eb; color: white; padding: 12px 24px; text-decoration: none; border-radius: 6px;">Start Assessment</a></p>
<p>The assessment should take about 30-45 minutes to complete. Please submit it within 3 days.</p>
<p>Good luck!</p>
""",
        text_content="Please complete your writing assessment for {{jobTitle}}. Visit: {{assessmentUrl}}",
    ),
    'shortlist_notification': EmailTemplate(
        name='shortlist_notification',
        subject="Congratulations! You've been shortlisted - {{jobTitle}}",
        html_content="""
<h2>Congratulations! You've been shortlisted</h2>
<p>Hi {{candidateName}},</p>
<p>We're excited to inform you that you've been shortlisted for the <strong>{{jobTitle}}</strong> position!</p>
<p>Your assessment scored {{aiScore}}/100, which puts you in our top candidates.</p>
<p>Our team will be in touch soon to discuss the next steps in the hiring process.</p>
""",
        text_content="Congratulations! You've been shortlisted for {{jobTitle}}. "
                     "Your assessment scored {{aiScore}}/100.",
    ),
    'rejection_notification': EmailTemplate(
        name='rejection_notification',
        subject='Application Update - {{jobTitle}}',
        html_content="""
<h2>Thank you for your application</h2>
<p>Hi {{candidateName}},</p>
<p>Thank you for your interest in the <strong>{{jobTitle}}</strong> position at {{companyName}}.</p>
<p>{{reason}}</p>
<p>We appreciate the time you invested in the application process and encourage you to apply for future opportunities.</p>
<p>Best regards,<br>The {{companyName}} Team</p>
""",
        text_content="Thank you for your application for {{jobTitle}} at {{companyName}}. {{reason}}",
    ),
    'admin_application_alert': EmailTemplate(
        name='admin_application_alert',
        subject='New Application Received - {{jobTitle}}',
        html_content="""
<h2>New Application Alert</h2>
<p>A new application has been received for <strong>{{jobTitle}}</strong>.</p>
<p><strong>Candidate:</strong> {{candidateName}}</p>
<p><a href="{{adminUrl}}">Review Application</a></p>
""",
        text_content="New application from {{candidateName}} for {{jobTitle}}. Review at: {{adminUrl}}",
    ),
}

_PLACEHOLDER = re.compile(r'\{\{\s*(\w+)\s*\}\}')


def _format_value(value: Any) -> str:
    if value is None:
        return ''
    if isinstance(value, float):
        return f"{value:g}"
    return str(value)


def render_template(template: str, values: Dict[str, Any], escape: bool = False) -> str:
    """Replace ``{{name}}`` placeholders. Unknown placeholders render empty."""
    def replace(match):
        text = _format_value(values.get(match.group(1)))
        return html.escape(text, quote=True) if escape else text

    return _PLACEHOLDER.sub(replace, template)


class NotificationMessageBuilder:
    @staticmethod
    def build(template_name: str, context: EmailContext) -> RenderedEmail:
        template = DEFAULT_TEMPLATES.get(template_name)
        if template is None:
            raise ValueError(f"Unknown email template: {template_name}")

        values = context.model_dump()
        return RenderedEmail(
            template_name=template_name,
            subject=render_template(template.subject, values),
            html=render_template(template.html_content, values, escape=True),
            text=render_template(template.text_content, values),
        )

    @staticmethod
    def application_url(base_url: str, application_id: Any) -> str:
        return f"{base_url.rstrip('/')}/candidate/applications/{application_id}"

    @staticmethod
    def assessment_url(base_url: str, application_id: Any) -> str:
        return f"{NotificationMessageBuilder.application_url(base_url, application_id)}/assessment"

    @staticmethod
    def admin_url(base_url: str, application_id: Any) -> str:
        return f"{base_url.rstrip('/')}/admin/applications/{application_id}"

    @staticmethod
    def from_header(from_email: str, company_name: Optional[str] = None) -> str:
        return f"{company_name or 'ATS Platform'} <{from_email}>"
