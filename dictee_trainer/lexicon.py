"""Static French tables used by word detection and misspelling generation.

Everything here is immutable: frozensets, tuples and read-only mappings.
Ordered tables are tuples of ``(pattern, replacements)`` because the order
is part of their meaning (first matching suffix wins, earlier sounds rank
higher).
"""
from __future__ import annotations

from types import MappingProxyType

# Titles, instructions and page furniture that show up in teachers' documents.
IGNORED_WORDS = frozenset({
    "dictée", "dictées", "dictee", "dictees",
    "flash", "mots", "mot", "savoir", "orthographier",
    "orthographe", "apprendre", "liste", "listes",
    "semaine", "période", "periode", "leçon", "lecon", "série", "serie",
    "évaluation", "evaluation", "contrôle", "controle",
    "exercice", "exercices", "révision", "revision",
    "date", "prénom", "prenom", "nom", "consigne",
    "le", "la", "les", "de", "du", "des", "au", "aux",
    "cp", "ce1", "ce2", "cm1", "cm2",
})

SECTION_KEYWORDS = ("dictée", "dictee", "liste", "semaine", "période", "periode",
                    "leçon", "lecon", "série", "serie")

# Header keywords typed without accents, titled with them.
ACCENTED_KEYWORDS = MappingProxyType({
    "dictee": "dictée",
    "periode": "période",
    "lecon": "leçon",
    "serie": "série",
})

DECORATIVE_GLYPHS = "▶►◀◄→←↑↓★☆●○■□▪▫✓✔✗✘"

# Endings students confuse most often. Longer endings come first so that
# "ier" is tried before "er" and "ment" before "ent".
SUFFIX_CONFUSIONS: tuple[tuple[str, tuple[str, ...]], ...] = (
    ("ssion", ("tion", "sion", "ssions")),
    ("tion", ("ssion", "sion", "cions")),
    ("ment", ("mant", "men", "ments")),
    ("aire", ("ère", "air", "aires")),
    ("ence", ("ance", "ense")),
    ("ance", ("ence", "anse")),
    ("ette", ("ète", "ete")),
    ("elle", ("èle", "ele")),
    ("eaux", ("aux", "eau", "os")),
    ("eau", ("o", "au", "eaux")),
    ("ier", ("ié", "iez", "iers")),
    ("ées", ("és", "é", "er")),
    ("ère", ("aire", "ere", "èrre")),
    ("ais", ("ait", "ai", "é")),
    ("ait", ("ais", "ai", "é")),
    ("eur", ("eure", "eurs", "eu")),
    ("oir", ("oire", "oirs")),
    ("ant", ("ent", "an", "ants")),
    ("ent", ("ant", "en", "ents")),
    ("és", ("é", "ées", "er")),
    ("ée", ("é", "er", "ées")),
    ("er", ("é", "ez", "ée")),
    ("ez", ("er", "é", "ée")),
    ("é", ("er", "ez", "ée")),
)

HOMOPHONES = MappingProxyType({
    "a": ("à",),
    "à": ("a",),
    "ou": ("où",),
    "où": ("ou",),
    "et": ("est", "ai"),
    "est": ("et", "ai"),
    "son": ("sont",),
    "sont": ("son",),
    "on": ("ont",),
    "ont": ("on",),
    "ce": ("se",),
    "se": ("ce",),
    "ces": ("ses", "c'est"),
    "ses": ("ces", "c'est"),
    "c'est": ("ces", "s'est"),
    "s'est": ("c'est",),
    "leur": ("leurs",),
    "leurs": ("leur",),
    "ma": ("m'a",),
    "ta": ("t'a",),
    "la": ("là", "l'a"),
    "là": ("la",),
    "ni": ("n'y",),
    "si": ("s'y",),
    "quand": ("quant", "qu'en"),
    "quant": ("quand",),
    "dans": ("d'en",),
    "sans": ("s'en", "sang"),
    "peu": ("peut", "peux"),
    "peut": ("peu", "peux"),
    "peux": ("peu", "peut"),
    "près": ("prêt",),
    "prêt": ("près",),
    "plutôt": ("plus tôt",),
    "plus tôt": ("plutôt",),
    "vers": ("vert", "verre"),
    "vert": ("vers", "verre"),
    "verre": ("vert", "vers"),
    "mer": ("mère", "maire"),
    "mère": ("mer", "maire"),
})

COMMON_MISSPELLINGS = MappingProxyType({
    "toujours": ("toujour", "toujous"),
    "beaucoup": ("baucoup", "beaucou", "bocoup"),
    "maintenant": ("maintenan", "mentenant"),
    "aujourd'hui": ("aujourdhui", "aujourd hui"),
    "longtemps": ("lontemps", "longtemp"),
    "quelquefois": ("quelque fois", "kelquefois"),
    "peut-être": ("peut être", "peutêtre"),
    "parce que": ("parceque", "par ce que"),
    "afin": ("a fin",),
    "enfin": ("en fin",),
    "cependant": ("cepandant", "cependan"),
    "également": ("égallement", "egalement"),
    "certainement": ("certainnement", "certainemen"),
    "apparemment": ("apparament", "aparemment"),
    "évidemment": ("évidament", "evidemment"),
    "vraiment": ("vraiement", "vraiman"),
    "gentiment": ("gentiement", "jentiment"),
    "couramment": ("courament", "courrament"),
    "notamment": ("notament", "notamant"),
    "hier": ("hièr", "yer"),
    "ensuite": ("ansuite", "ensuitte"),
})

ACCENTS = MappingProxyType({
    "é": "e", "è": "e", "ê": "e", "ë": "e",
    "à": "a", "â": "a",
    "ù": "u", "û": "u", "ü": "u",
    "î": "i", "ï": "i",
    "ô": "o",
    "ç": "c",
})

# Sound-alike spellings, most frequent confusions first.
PHONETIC_CONFUSIONS: tuple[tuple[str, tuple[str, ...]], ...] = (
    ("eau", ("o", "au")),
    ("ain", ("in", "ein")),
    ("ein", ("ain", "in")),
    ("ph", ("f", "ff")),
    ("qu", ("k", "c")),
    ("au", ("o", "eau")),
    ("ai", ("é", "è")),
    ("an", ("en", "am")),
    ("en", ("an", "em")),
    ("in", ("ain", "ein")),
    ("on", ("om", "ont")),
    ("oi", ("oie", "oa")),
    ("ou", ("oo", "oue")),
    ("é", ("ai", "er")),
    ("è", ("ai", "ê")),
    ("ê", ("è", "ai")),
    ("ç", ("ss", "s")),
    ("ge", ("je", "gue")),
    ("ch", ("sh", "sch")),
)

DOUBLE_CONSONANTS = ("bb", "cc", "dd", "ff", "gg", "ll", "mm", "nn", "pp", "rr", "ss", "tt")

CONSONANTS = "bcdfghjklmnpqrstvwxz"
