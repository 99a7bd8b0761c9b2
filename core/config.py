"""Configuration constants for finyap application."""

LANGUAGE = 'Finnish'

# Suffix particles, checked in this order on every pass
CLITICS = ['kaan', 'kään', 'kin', 'han', 'hän', 'ko', 'kö', 'pa', 'pä']

# Trimmed from both ends of a word before matching
PUNCTUATION = '.,!?;:"()[]{}„“”«»\''

# Cipher classes
LOW_VOWELS = 'aou'
MID_VOWELS = 'ei'
HIGH_VOWELS = 'äöy'
CONSONANTS = 'bcdfghjklmnpqrstvwxz'

LOW_VOWEL_MARK = 'U'
MID_VOWEL_MARK = 'E'
HIGH_VOWEL_MARK = 'Ä'
CONSONANT_MARK = 'x'

# Session composition
DEFAULT_SENTENCES_PER_SCENARIO = 10

# Content
SCENARIOS_DIR = 'scenarios'
SCENARIO_FILE_SUFFIX = '.tsv'
