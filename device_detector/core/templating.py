"""Boolean predicates for view templates ({% if mobile %} ... {% endif %})."""

from typing import Any

from device_detector.core.detector import ClassificationResult


def template_conditionals(result: ClassificationResult) -> dict[str, bool]:
    return {
        "mobile": result.is_mobile,
        "tablet": result.is_tablet,
        "desktop": result.is_desktop,
        "robot": result.is_robot,
        "tor": result.is_tor,
    }


def register_conditionals(env: Any, result: ClassificationResult) -> None:
    """Merge the predicates into a template environment's ``globals``."""
    env.globals.update(template_conditionals(result))
