from string import Template

_DOCUMENT = Template(
    """<!DOCTYPE html>
<html lang="en">
<head>
<meta charset="UTF-8">
<meta name="viewport" content="width=device-width, initial-scale=1.0">
<style>$css</style>
</head>
<body>
$html
<script>
$js
</script>
</body>
</html>
"""
)


def _escape_script(js: str) -> str:
    # a literal "</script>" inside user code would end the tag early
    return js.replace("</script", "<\\/script")


def compose_document(html: str = "", css: str = "", js: str = "") -> str:
    """Assemble the document the preview iframe renders."""
    return _DOCUMENT.substitute(
        html=html or "", css=css or "", js=_escape_script(js or "")
    )


def bundle_for_commit(html: str = "", css: str = "", js: str = "") -> str:
    """Single text blob used when a web-mode project is saved to version control."""
    return (
        f"<!-- HTML -->\n{html}\n\n"
        f"<!-- CSS -->\n<style>\n{css}\n</style>\n\n"
        f"<!-- JavaScript -->\n<script>\n{js}\n</script>"
    )
