"""
HTML and plain-text bodies for contact notifications.
"""

from typing import List, Tuple

from jinja2 import Environment

_env = Environment(autoescape=True, trim_blocks=True, lstrip_blocks=True)

HTML_TEMPLATE = _env.from_string("""\
<div style="font-family: 'Inter', sans-serif; color: #0B1220; line-height: 1.6;">
  <h2 style="margin-bottom: 12px; font-size: 20px;">New contact request</h2>
  <p style="margin: 0 0 16px;">A new message just came through your portfolio. Here are the details:</p>
  <table style="border-collapse: collapse; width: 100%;">
    <tbody>
{% for label, value in rows %}
      <tr>
        <td style="padding: 8px 12px; font-weight: 600; background:#F7FAFF; width: 160px;">{{ label }}</td>
        <td style="padding: 8px 12px;">{{ value }}</td>
      </tr>
{% endfor %}
    </tbody>
  </table>
  <div style="margin-top: 24px;">
    <h3 style="margin-bottom: 8px; font-size: 16px;">Message</h3>
    <div style="padding: 16px; background: #F0F4FF; border-radius: 12px; white-space: pre-wrap;">{{ message }}</div>
  </div>
</div>
""")


def detail_rows(submission) -> List[Tuple[str, str]]:
    """Labelled submission fields, in display order, skipping blanks"""
    rows = [
        ("Name", submission.name),
        ("Email", submission.email),
        ("Company", submission.company),
        ("Project Type", submission.project_type),
        ("Budget", submission.budget),
        ("Timeline", submission.timeline),
    ]
    return [(label, value) for label, value in rows if value]


def format_html(submission) -> str:
    return HTML_TEMPLATE.render(rows=detail_rows(submission), message=submission.message)


def format_text(submission) -> str:
    details = "\n".join(f"{label}: {value}" for label, value in detail_rows(submission))
    return f"New contact request\n\n{details}\n\nMessage:\n{submission.message}\n"
