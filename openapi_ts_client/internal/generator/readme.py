from .templates import templates
from ..types.document import Info


def build_readme(info: Info) -> str:
    """Обзор API в markdown по разделу info"""
    text = templates.readme_title.format(title=info.title)
    text += "\n"
    if info.description:
        text += f"{info.description}\n"
        text += "\n"
    text += templates.readme_version.format(version=info.version)

    if info.terms_of_service:
        text += templates.readme_terms.format(url=info.terms_of_service)
        text += "\n"

    if info.license:
        text += templates.readme_license
        text += "\n"
        if info.license.url:
            text += f"[{info.license.name}]({info.license.url})"
        else:
            text += info.license.name
        text += "\n"

    contact = info.contact
    if contact:
        text += templates.readme_contact
        text += "\n"
        if contact.name:
            text += f"Name: {contact.name}\n\n"
        if contact.email:
            text += f"Email: {contact.email}\n\n"
        if contact.url:
            text += f"Website: {contact.url}\n\n"

    return text
