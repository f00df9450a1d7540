"""
Email Service using Resend

Transactional mail for students: registration welcome and course
registration confirmation. Sending is always best effort; callers log a
failure and carry on.
"""

import asyncio
import logging
from html import escape

import resend

from ictreg.core.config import settings

logger = logging.getLogger(__name__)

resend.api_key = settings.resend_api_key

_STYLE = """
        <style>
            body { font-family: system-ui, -apple-system, sans-serif; line-height: 1.6; color: #1f2937; }
            .container { max-width: 600px; margin: 0 auto; padding: 40px 20px; }
            .header { color: #14532d; margin-bottom: 24px; }
            .button { display: inline-block; background-color: #14532d; color: white; padding: 14px 28px; text-decoration: none; border-radius: 8px; margin: 24px 0; }
            .summary-box { background-color: #f9fafb; border: 1px solid #e5e7eb; padding: 16px; border-radius: 8px; margin: 16px 0; }
            .footer { margin-top: 40px; padding-top: 20px; border-top: 1px solid #e5e7eb; color: #6b7280; font-size: 14px; }
        </style>
"""


async def send_email(to_email: str, subject: str, html_content: str) -> bool:
    """
    Send an email using Resend.

    Without an API key the email is logged instead of sent.

    Returns:
        True if the email was sent (or logged), False on failure
    """
    if not resend.api_key:
        logger.warning("RESEND_API_KEY not set - logging email instead of sending")
        logger.info(f"EMAIL TO: {to_email} | SUBJECT: {subject}")
        return True

    try:
        params: resend.Emails.SendParams = {
            "from": settings.email_from,
            "to": [to_email],
            "subject": subject,
            "html": html_content,
        }

        # Resend's client is synchronous
        email = await asyncio.to_thread(resend.Emails.send, params)
        logger.info(f"Email sent successfully to {to_email}, id: {email['id']}")
        return True
    except Exception as e:
        logger.error(f"Failed to send email to {to_email}: {e}")
        return False


async def send_registration_welcome(to_email: str, student_name: str) -> bool:
    """Welcome a newly registered student and point them at their profile."""
    safe_name = escape(student_name)
    profile_url = f"{settings.frontend_url}/profile"

    html_content = f"""
    <!DOCTYPE html>
    <html>
    <head>{_STYLE}</head>
    <body>
        <div class="container">
            <h1 class="header">Registration Successful</h1>

            <p>Hello {safe_name},</p>

            <p>Your ICT-REG student account has been created.</p>

            <p>Next, complete your profile and upload your admission documents:</p>

            <a href="{profile_url}" class="button">Complete Profile</a>

            <div class="footer">
                <p>If you did not register, please contact the ICT unit.</p>
                <p>ICT-REG - Student Registration</p>
            </div>
        </div>
    </body>
    </html>
    """

    return await send_email(
        to_email=to_email,
        subject="Welcome to ICT-REG",
        html_content=html_content,
    )


async def send_course_registration_confirmation(
    to_email: str,
    student_name: str,
    matric_no: str,
    course_code: str,
    course_title: str,
) -> bool:
    """Confirm a successful course registration."""
    safe_name = escape(student_name)
    safe_matric = escape(matric_no)
    safe_code = escape(course_code)
    safe_title = escape(course_title)

    html_content = f"""
    <!DOCTYPE html>
    <html>
    <head>{_STYLE}</head>
    <body>
        <div class="container">
            <h1 class="header">Course Registered</h1>

            <p>Hello {safe_name},</p>

            <div class="summary-box">
                <p><strong>Matric No:</strong> {safe_matric}</p>
                <p><strong>Course:</strong> {safe_code} - {safe_title}</p>
            </div>

            <p>Your registration pin has been used and cannot be reused.</p>

            <div class="footer">
                <p>ICT-REG - Student Registration</p>
            </div>
        </div>
    </body>
    </html>
    """

    return await send_email(
        to_email=to_email,
        subject=f"Course registration confirmed: {course_code}",
        html_content=html_content,
    )
