"""
HTML email templates for payment confirmations and filmmaker invitations
"""
from datetime import datetime
from html import escape
from typing import Optional


class MessageTemplate:
    """Base class for email templates"""

    subject = ""

    @staticmethod
    def render_plain_text(**kwargs) -> str:
        """Render plain text version"""
        raise NotImplementedError

    @staticmethod
    def render_html(**kwargs) -> str:
        """Render HTML version"""
        raise NotImplementedError


def _wrap_html(title: str, body: str) -> str:
    return f"""
<!DOCTYPE html>
<html lang="en">
<head>
    <meta charset="UTF-8">
    <meta name="viewport" content="width=device-width, initial-scale=1.0">
    <title>{escape(title)}</title>
</head>
<body style="margin: 0; padding: 0; font-family: -apple-system, BlinkMacSystemFont, 'Segoe UI', Roboto, Arial, sans-serif; background-color: #f8f9fa;">
    <table width="100%" cellpadding="0" cellspacing="0" style="background-color: #f8f9fa; padding: 40px 20px;">
        <tr>
            <td align="center">
                <table width="600" cellpadding="0" cellspacing="0" style="background-color: white; border-radius: 8px; overflow: hidden;">
                    <tr>
                        <td style="background: #111827; padding: 32px 40px; text-align: center;">
                            <h1 style="margin: 0; color: white; font-size: 24px; font-weight: 600;">{escape(title)}</h1>
                        </td>
                    </tr>
                    <tr>
                        <td style="padding: 40px; color: #374151; font-size: 15px; line-height: 1.6;">
                            {body}
                        </td>
                    </tr>
                    <tr>
                        <td style="background: #f8f9fa; padding: 24px 40px; border-top: 1px solid #e9ecef;">
                            <p style="margin: 0; color: #adb5bd; font-size: 12px; text-align: center;">
                                &copy; {datetime.now().year} Hollywood Weekly. All rights reserved.
                            </p>
                        </td>
                    </tr>
                </table>
            </td>
        </tr>
    </table>
</body>
</html>
    """.strip()


class PaymentConfirmationTemplate(MessageTemplate):
    """Sent after a filmmaker subscription payment succeeds"""

    subject = "Your filmmaker subscription is active"

    @staticmethod
    def render_plain_text(name: str, plan_name: str, amount: float, end_date: datetime) -> str:
        return "\n".join([
            f"Hello {name},",
            "",
            f"Thank you for your payment of ${amount:.2f} for the {plan_name} plan.",
            f"Your filmmaker subscription is active until {end_date.strftime('%B %d, %Y')}.",
            "",
            "You can now upload films and distribute them to our partner platforms.",
            "",
            "Best regards,",
            "Hollywood Weekly Team",
        ])

    @staticmethod
    def render_html(name: str, plan_name: str, amount: float, end_date: datetime) -> str:
        body = f"""
            <p style="margin: 0 0 24px 0;">Hello {escape(name)},</p>
            <p style="margin: 0 0 24px 0;">
                Thank you for your payment of <strong>${amount:.2f}</strong> for the
                <strong>{escape(plan_name)}</strong> plan.
            </p>
            <div style="background: #ecfdf5; border-left: 4px solid #10b981; padding: 16px; margin: 24px 0; border-radius: 4px;">
                Your filmmaker subscription is active until <strong>{end_date.strftime('%B %d, %Y')}</strong>.
            </div>
            <p style="margin: 0;">You can now upload films and distribute them to our partner platforms.</p>
        """
        return _wrap_html("Payment Confirmed", body)


class FilmmakerInvitationTemplate(MessageTemplate):
    """Outreach invitation to a festival filmmaker"""

    subject = "Distribute your film with Hollywood Weekly"

    @staticmethod
    def render_plain_text(
        name: str,
        signup_url: str,
        film_title: Optional[str] = None,
        message: Optional[str] = None
    ) -> str:
        film_line = f"We loved learning about \"{film_title}\"." if film_title else "We loved learning about your work."
        parts = [f"Hello {name},", "", film_line]
        if message:
            parts.extend(["", message])
        parts.extend([
            "",
            "Hollywood Weekly distributes independent films to Google TV, Prime Video, Apple TV and Peacock.",
            f"Create your filmmaker account: {signup_url}",
            "",
            "Best regards,",
            "Hollywood Weekly Team",
        ])
        return "\n".join(parts)

    @staticmethod
    def render_html(
        name: str,
        signup_url: str,
        film_title: Optional[str] = None,
        message: Optional[str] = None
    ) -> str:
        film_line = (
            f"We loved learning about <strong>{escape(film_title)}</strong>."
            if film_title else "We loved learning about your work."
        )
        custom = f'<p style="margin: 0 0 24px 0;">{escape(message)}</p>' if message else ""
        body = f"""
            <p style="margin: 0 0 24px 0;">Hello {escape(name)},</p>
            <p style="margin: 0 0 24px 0;">{film_line}</p>
            {custom}
            <p style="margin: 0 0 24px 0;">
                Hollywood Weekly distributes independent films to Google TV, Prime Video, Apple TV and Peacock.
            </p>
            <div style="text-align: center; margin: 32px 0;">
                <a href="{escape(signup_url)}" style="display: inline-block; background: #111827; color: white; text-decoration: none; padding: 14px 32px; border-radius: 6px; font-weight: 600;">
                    Create your filmmaker account
                </a>
            </div>
        """
        return _wrap_html("You're invited", body)
