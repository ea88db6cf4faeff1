"""Reading and writing .env files.

The format is one ``KEY=VALUE`` pair per line. Blank lines and lines starting
with ``#`` are ignored, and a value wrapped in a matching pair of single or
double quotes loses exactly one layer of quoting. Values are written back
verbatim, sorted by key.
"""

from pathlib import Path

from .errors import EnvFileError, ValidationError

QUOTES = ('"', "'")


def _unquote(value: str) -> str:
    if len(value) >= 2 and value[0] == value[-1] and value[0] in QUOTES:
        return value[1:-1]
    return value


def parse_env(text: str) -> dict[str, str]:
    """Parse .env content into a mapping. The last occurrence of a key wins."""
    variables: dict[str, str] = {}

    for line_number, raw_line in enumerate(text.split("\n"), start=1):
        line = raw_line.strip()
        if not line or line.startswith("#"):
            continue

        key, sep, value = line.partition("=")
        if not sep:
            raise EnvFileError(line_number, line)

        variables[key.strip()] = _unquote(value.strip())

    return variables


def parse_env_file(path: Path) -> dict[str, str]:
    try:
        text = Path(path).read_text(encoding="utf-8")
    except UnicodeDecodeError as e:
        raise ValidationError(f"file is not valid UTF-8 (byte {e.start})") from e
    return parse_env(text)


def format_env(variables: dict[str, str]) -> str:
    return "".join(f"{key}={variables[key]}\n" for key in sorted(variables))


def write_env_file(path: Path, variables: dict[str, str]):
    Path(path).write_text(format_env(variables), encoding="utf-8")
