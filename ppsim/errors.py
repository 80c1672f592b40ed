class CalculationError(Exception):
    pass


class MissingInputError(CalculationError, ValueError):
    pass


class HashMismatchError(CalculationError):
    pass


class DownloadError(CalculationError):
    pass


class BeatmapConversionError(CalculationError):
    pass


class UnknownRulesetError(CalculationError, ValueError):
    """Raised for a ruleset id or name outside the four supported ones."""

    valid_names = ('standard', 'std', 'osu', 'taiko', 'ctb', 'catch', 'fruits', 'mania')

    def __init__(self, ruleset):
        self.ruleset = ruleset
        super().__init__('Unknown ruleset: {}! Valid rulesets are 0-3 or {}'.format(
            ruleset, ', '.join(self.valid_names)))
