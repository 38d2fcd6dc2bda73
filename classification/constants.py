# classification/constants.py
# Tunable weights and defaults for the document classifier.

EXACT_MATCH_WEIGHT = 2.0

# Bonus per token containing the label's own name
SUBSTRING_BONUS = {
"category": 3.0,
"subject": 1.0,
"priority": 1.0,
}


CONFIDENCE_WEIGHTS = {
"category": 0.6,
"subject": 0.4,
}
FALLBACK_CONFIDENCE = 0.1


MIN_TOKEN_LENGTH = 2
MAX_SUBJECTS = 3
TOP_TAG_TERMS = 10
MIN_TAG_TERM_LENGTH = 4
MAX_TAGGED_ENTITIES = 3
MAX_KEY_TERMS = 50

MAX_RELATED_DOCUMENTS = 5
MIN_RELATED_SIMILARITY = 0.1
MIN_CONFIDENCE_THRESHOLD = 0.6


STOP_WORDS = frozenset("""
a an the and or but if then else when at from by on off for in out over to
into with about against between during without before after above below up
down this that these those is are was were be been being have has had do does
did will would of also as it its they them their what which who whom whose
where why how all any both each few more most other some such no nor not only
own same so than too very there here our your you we he she his her him i me
my us
""".split())
