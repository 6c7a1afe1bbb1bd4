import sys

from loguru import logger

PALETTE = {
    "solver": "green",
    "parallel": "blue",
    "cli": "cyan",
}

LEVEL_PER_COMPONENT = {
    "solver": "INFO",
}


def component_filter(record):
    comp = record["extra"].get("component", "")
    min_level = logger.level(LEVEL_PER_COMPONENT.get(comp, "DEBUG")).no
    return record["level"].no >= min_level


def formatter(record):
    comp = record["extra"].get("component", "")
    search_id = record["extra"].get("search_id", "")
    colour = PALETTE.get(comp, "white")

    if search_id:
        return (
            "{time:HH:mm:ss} | "
            f"<{colour}>{comp:<10} | {search_id:<30}</> | "
            "<level>{message}</level>\n"
        )
    else:
        return (
            "{time:HH:mm:ss} | "
            f"<{colour}>{comp:<10}</> | "
            "<level>{message}</level>\n"
        )


def set_component_level(component: str, level: str) -> None:
    """Change the minimum level shown for one component (e.g. from a --verbose flag)."""
    LEVEL_PER_COMPONENT[component] = level


logger.remove()
logger.add(sys.stderr, format=formatter, filter=component_filter, colorize=True)
