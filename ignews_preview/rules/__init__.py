from ignews_preview.rules.loader import load_rules, parse_rules
from ignews_preview.rules.models import Rules

__all__ = ["Rules", "load_rules", "parse_rules"]
