import logging

from ppsim.errors import MissingInputError

logger = logging.getLogger(__name__)


def calculate_difficulty(beatmap=None, ruleset=None, mods=None, total_hits=None,
    calculator=None):
    """Difficulty attributes of a beatmap that has its ruleset and mods applied.

    ``total_hits`` limits the calculation to the first objects, for failed or
    unfinished scores.
    """
    if calculator is None:
        if beatmap is None or ruleset is None:
            raise MissingInputError('Cannot calculate difficulty without beatmap or ruleset!')
        calculator = ruleset.create_difficulty_calculator(beatmap)

    if total_hits is not None:
        logger.debug('Partial difficulty for {} hits'.format(total_hits))

    return calculator.calculate(mods, total_hits)


def calculate_performance(difficulty=None, score_info=None, ruleset=None):
    if difficulty is None or score_info is None:
        raise MissingInputError('Cannot calculate performance without difficulty or score!')

    if ruleset is None:
        ruleset = score_info.ruleset

    calculator = ruleset.create_performance_calculator(difficulty, score_info)
    return calculator.calculate_attributes()


def to_difficulty_attributes(data, ruleset, mods=None):
    """Typed difficulty attributes from precalculated values.

    Only keys the ruleset's attributes declare are copied, others are ignored.
    ``mods`` is used when the values carry none.
    """
    target_class = ruleset.difficulty_attributes_class
    if isinstance(data, target_class):
        return data

    if not isinstance(data, dict):
        data = vars(data)

    if data.get('mods') is not None:
        mods = data['mods']
    attributes = ruleset.create_difficulty_attributes(mods)
    for key, value in data.items():
        if key == 'mods' or not hasattr(attributes, key):
            continue
        setattr(attributes, key, value)
    return attributes
