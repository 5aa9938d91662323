class Templates:
    """Шаблоны для генерации файлов"""

    client_imports = [
        'import axios from "axios";',
        'import * as Models from "./models";',
    ]

    models_header = "// Auto-generated models. Do not edit manually."

    request = """const response = await axios.request<{response}>({{
\tmethod: "{verb}",
\turl: `{url}`,
{options}}});
return response.data;"""

    object_option = """\t{name}: {{
{entries}
\t}},"""

    readme_title = "# {title}\n"
    readme_version = "Version: {version}\n"
    readme_terms = "[Terms of service]({url})\n"
    readme_license = "## License\n"
    readme_contact = "## Contact\n"


templates = Templates()
