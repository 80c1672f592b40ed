import logging

logger = logging.getLogger(__name__)

# index == bit position
MODS = [
    'NF','EZ','TD','HD','HR','SD','DT','RX','HT','NC','FL','AT',
    'SO','AP','PF','4K','5K','6K','7K','8K','FI','RD','CN','TP',
    '9K','CP','1K','3K','2K','V2','MR'
]

# NC is sent as 576 and PF as 16416
IMPLIED_MODS = {'NC': 'DT', 'PF': 'SD'}

DIFFICULTY_REDUCTION_MODS = ('EZ', 'NF', 'HT')
DIFFICULTY_MODS = ('EZ', 'TD', 'HD', 'HR', 'DT', 'HT', 'FL')
NO_MOD_NAMES = ('', 'NM', 'NOMOD', 'NONE')


def num_to_mod(number):
    number = int(number)
    mod_list = []

    for mod_idx, mod in enumerate(MODS):
        if number & (1 << mod_idx):
            mod_list.append(mod)

    return mod_list


def mod_to_num(mod_list):
    total = 0
    for mod in mod_list:
        total |= 1 << MODS.index(mod)
        if mod in IMPLIED_MODS:
            total |= 1 << MODS.index(IMPLIED_MODS[mod])
    return total


def str_to_mod(mod_str:str):
    mod_str = mod_str.upper().strip()
    for char in '+-,|_ ':
        mod_str = mod_str.replace(char, '')

    if mod_str in NO_MOD_NAMES:
        return []
    if mod_str.isdigit():
        return num_to_mod(mod_str)

    mod_list = []
    i = 0
    while i < len(mod_str):
        acronym = mod_str[i:i+2]
        if acronym in MODS:
            mod_list.append(acronym)
            i += 2
        else:
            i += 1
    return mod_list


def parse_mods(mods):
    """Turns a bitwise number, acronym string, acronym list or combination
    into a list of acronyms."""
    if mods is None:
        return []
    if isinstance(mods, ModCombination):
        return list(mods.acronyms)
    if isinstance(mods, bool):
        raise TypeError('Mods can not be a boolean')
    if isinstance(mods, int):
        return num_to_mod(mods)
    if isinstance(mods, str):
        return str_to_mod(mods)

    mod_list = []
    for mod in mods:
        mod_list.extend(parse_mods(mod))
    return mod_list


class ModCombination(object):
    def __init__(self, mods=None, ruleset_id=0, valid_mods=None, multipliers=None):
        self.ruleset_id = int(ruleset_id)
        self.multipliers = multipliers or {}

        acronyms = set(parse_mods(mods))
        for mod, implied in IMPLIED_MODS.items():
            if mod in acronyms:
                acronyms.add(implied)

        if valid_mods is not None:
            invalid = acronyms.difference(valid_mods)
            if invalid:
                logger.debug('Dropping mods {} for ruleset {}'.format(
                    ''.join(sorted(invalid)), self.ruleset_id))
            acronyms = acronyms.intersection(valid_mods)

        self.acronyms = sorted(acronyms, key=MODS.index)

    @property
    def bitwise(self):
        return mod_to_num(self.acronyms)

    @property
    def clock_rate(self):
        if self.has('DT'):
            return 1.5
        if self.has('HT'):
            return 0.75
        return 1.0

    @property
    def score_multiplier(self):
        multiplier = 1.0
        for mod in self.difficulty_reduction:
            multiplier *= self.multipliers.get(mod, 1.0)
        return multiplier

    @property
    def difficulty_reduction(self):
        return [mod for mod in self.acronyms if mod in DIFFICULTY_REDUCTION_MODS]

    def has(self, acronym):
        return acronym.upper() in self.acronyms

    def difficulty_mods(self):
        """Only the mods that change difficulty, NC counted as DT."""
        mods = [mod for mod in self.acronyms if mod in DIFFICULTY_MODS]
        return ModCombination(mods, self.ruleset_id, multipliers=self.multipliers)

    def copy(self):
        return ModCombination(self.acronyms, self.ruleset_id,
            multipliers=self.multipliers)

    def __iter__(self):
        return iter(self.acronyms)

    def __len__(self):
        return len(self.acronyms)

    def __eq__(self, other):
        if isinstance(other, ModCombination):
            return self.bitwise == other.bitwise and self.ruleset_id == other.ruleset_id
        return NotImplemented

    def __hash__(self):
        return hash((self.ruleset_id, self.bitwise))

    def __str__(self):
        hidden = [IMPLIED_MODS[mod] for mod in IMPLIED_MODS if mod in self.acronyms]
        shown = [mod for mod in self.acronyms if mod not in hidden]
        return ''.join(shown) if shown else 'NM'

    def __repr__(self):
        return "ModCombination('{}', ruleset_id={})".format(str(self), self.ruleset_id)
