"""
Email Template Service for rendering Jinja2 email templates.

WHAT: Loads and renders the contact-form email templates.

HOW: Uses a Jinja2 environment with FileSystemLoader over the package's
templates/email directory. Each render method returns
``(subject, html_content, text_content)``.
"""

import logging
from pathlib import Path
from typing import Dict, Any, Optional, Tuple
from datetime import datetime

from jinja2 import Environment, FileSystemLoader, select_autoescape, TemplateNotFound

from records_api.core.config import settings
from records_api.core.exceptions import EmailServiceError


logger = logging.getLogger(__name__)

OWNER_TEMPLATE = "mail_owner.html"
CLIENT_TEMPLATE = "mail_client.html"


class EmailTemplateService:
    """
    Service for rendering email templates.

    Example:
        template_service = EmailTemplateService()
        subject, html, text = template_service.render_owner_email(
            submission={"name": "Ada", "email": "ada@example.com"},
        )
    """

    def __init__(self, template_dir: Optional[Path] = None, app_name: Optional[str] = None):
        """
        Initialize template service.

        Args:
            template_dir: Path to templates directory (defaults to records_api/templates/email)
            app_name: Application name shown in every email (defaults to settings.APP_NAME)
        """
        if template_dir is None:
            template_dir = Path(__file__).parent.parent / "templates" / "email"

        self._template_dir = template_dir
        self._app_name = app_name or settings.APP_NAME
        self._env = self._create_environment()

    def _create_environment(self) -> Environment:
        """
        Create Jinja2 environment with autoescaping for HTML templates.

        Returns:
            Configured Jinja2 Environment
        """
        env = Environment(
            loader=FileSystemLoader(str(self._template_dir)),
            autoescape=select_autoescape(["html", "xml"]),
            trim_blocks=True,
            lstrip_blocks=True,
        )

        env.filters["humanize"] = self._humanize_filter

        return env

    @staticmethod
    def _humanize_filter(key: str) -> str:
        """Turn a field key like ``first_name`` into ``First name``."""
        text = str(key).replace("_", " ").strip()
        return text[:1].upper() + text[1:]

    def _get_base_context(self) -> Dict[str, Any]:
        """
        Get base context variables for all templates.

        Returns:
            Dict with base context variables
        """
        return {
            "year": datetime.utcnow().year,
            "app_name": self._app_name,
        }

    def render_template(
        self,
        template_name: str,
        context: Dict[str, Any],
    ) -> str:
        """
        Render a template with given context.

        Args:
            template_name: Name of template file (e.g., "mail_owner.html")
            context: Template variables

        Returns:
            Rendered HTML string

        Raises:
            EmailServiceError: If template not found or render fails
        """
        try:
            template = self._env.get_template(template_name)
            full_context = {**self._get_base_context(), **context}
            return template.render(**full_context)
        except TemplateNotFound:
            logger.error(f"Email template not found: {template_name}")
            raise EmailServiceError(
                message=f"Email template not found: {template_name}",
                template=template_name,
            )
        except Exception as e:
            logger.error(f"Error rendering template {template_name}: {e}")
            raise EmailServiceError(
                message="Failed to render email template",
                template=template_name,
                error=str(e),
            )

    def render_owner_email(self, submission: Dict[str, Any]) -> Tuple[str, str, str]:
        """
        Render the owner notification for a contact submission.

        Args:
            submission: Every field the visitor submitted

        Returns:
            Tuple of (subject, html_content, text_content)
        """
        subject = f"New contact submission on {self._app_name}"
        html = self.render_template(OWNER_TEMPLATE, {"data": submission})
        lines = [f"{self._humanize_filter(key)}: {value}" for key, value in submission.items()]
        text = self._generate_text_version(
            f"A visitor submitted the contact form on {self._app_name}.\n\n" + "\n".join(lines)
        )
        return subject, html, text

    def render_client_email(self, submission: Dict[str, Any]) -> Tuple[str, str, str]:
        """
        Render the acknowledgement sent back to the submitter.

        Args:
            submission: Every field the visitor submitted

        Returns:
            Tuple of (subject, html_content, text_content)
        """
        subject = f"Thanks for contacting {self._app_name}"
        html = self.render_template(CLIENT_TEMPLATE, {"data": submission})
        name = submission.get("name")
        text = self._generate_text_version(
            (f"Hi {name},\n\n" if name else "Hello,\n\n")
            + f"We received your message and the {self._app_name} team will get back to you soon."
        )
        return subject, html, text

    def _generate_text_version(self, content: str) -> str:
        """
        Generate plain text email version.

        Args:
            content: Text content

        Returns:
            Formatted plain text email
        """
        footer = f"\n\n---\n{self._app_name}"
        return content.strip() + footer


_template_service: Optional[EmailTemplateService] = None


def get_email_template_service() -> EmailTemplateService:
    """
    Get or create the global template service instance.

    Returns:
        EmailTemplateService instance
    """
    global _template_service

    if _template_service is None:
        _template_service = EmailTemplateService()

    return _template_service
