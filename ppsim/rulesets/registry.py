from ppsim.errors import UnknownRulesetError
from .catch import CatchRuleset
from .mania import ManiaRuleset
from .standard import StandardRuleset
from .taiko import TaikoRuleset

RULESETS = {
    0: StandardRuleset(),
    1: TaikoRuleset(),
    2: CatchRuleset(),
    3: ManiaRuleset(),
}

RULESET_NAMES = {
    'standard': 0,
    'std': 0,
    'osu': 0,
    'taiko': 1,
    'ctb': 2,
    'catch': 2,
    'fruits': 2,
    'mania': 3,
}


def get_ruleset_id_by_name(name):
    try:
        return RULESET_NAMES[str(name).strip().lower()]
    except KeyError:
        raise UnknownRulesetError(name)


def get_ruleset_by_id(ruleset_id):
    try:
        return RULESETS[int(ruleset_id)]
    except (KeyError, TypeError, ValueError):
        raise UnknownRulesetError(ruleset_id)


def get_ruleset_by_name(name):
    return RULESETS[get_ruleset_id_by_name(name)]


def to_ruleset_id(value):
    """Accepts an id, a digit string or a ruleset name."""
    if value is None:
        return None
    if isinstance(value, bool):
        raise UnknownRulesetError(value)
    if isinstance(value, int):
        get_ruleset_by_id(value)
        return int(value)

    value = str(value).strip()
    if value.isdigit():
        get_ruleset_by_id(value)
        return int(value)
    return get_ruleset_id_by_name(value)


def get_ruleset(value):
    return get_ruleset_by_id(to_ruleset_id(value))
