# src/pocket_props/describe.py

"""Help text for declared properties."""

from .registry import PropertyRegistry
from .sources import env_key
from .utils_logs import CYAN, GRAY, YELLOW, colorize


def format_help(
    registry: PropertyRegistry,
    *,
    env_prefix: str = "",
    use_color: bool | None = None,
) -> str:
    entries = registry.describe_all()
    if not entries:
        return "No properties declared."

    width = max(len(e["name"]) for e in entries)
    lines = [f"Properties ({len(entries)}):"]
    for e in entries:
        tags: list[str] = []
        if e["mandatory"]:
            tags.append(colorize("required", YELLOW, use_color=use_color))
        elif e["default"] is not None:
            tags.append(f"default: {e['default']!r}")
        else:
            tags.append("optional")
        if e["sensitive"]:
            tags.append(colorize("sensitive", CYAN, use_color=use_color))

        name = e["name"].ljust(width)
        suffix = f" [{', '.join(tags)}]" if tags else ""
        lines.append(f"  {name}  {e['description']}{suffix}")
        env = colorize(f"env: {env_key(e['name'], env_prefix)}", GRAY, use_color=use_color)
        lines.append(f"  {' ' * width}  {env}")

    return "\n".join(lines)
