"""Editor language ids by file extension"""

LANGUAGE_MAP = {
    "js": "javascript",
    "jsx": "javascript",
    "ts": "typescript",
    "tsx": "typescript",
    "json": "json",
    "html": "html",
    "css": "css",
    "scss": "scss",
    "py": "python",
    "java": "java",
    "cpp": "cpp",
    "c": "c",
    "md": "markdown",
    "xml": "xml",
    "yaml": "yaml",
    "yml": "yaml",
    "sh": "shell",
    "sql": "sql",
    "php": "php",
    "go": "go",
    "rs": "rust",
    "rb": "ruby",
    "swift": "swift",
    "kt": "kotlin",
    "r": "r",
}


def language_for_file(file_name: str) -> str:
    if "." not in file_name:
        return "plaintext"
    extension = file_name.rsplit(".", 1)[-1].lower()
    return LANGUAGE_MAP.get(extension, "plaintext")
