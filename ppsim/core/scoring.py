from ppsim.rulesets.registry import get_ruleset_by_id


def calculate_accuracy(score_info):
    """Accuracy in [0, 1] from the score's hit statistics."""
    return get_ruleset_by_id(score_info.ruleset_id).calculate_accuracy(score_info.statistics)


def calculate_rank(score_info):
    return get_ruleset_by_id(score_info.ruleset_id).calculate_rank(score_info)


def calculate_total_hits(score_info):
    return get_ruleset_by_id(score_info.ruleset_id).calculate_total_hits(
        score_info.statistics)


# Total score after the difficulty reduction mods
# @param  {Integer}         total_score
# @param  {ModCombination}  mods
# @return {Float}
def scale_total_score(total_score, mods):
    if mods is None:
        return float(total_score)
    return total_score * mods.score_multiplier
