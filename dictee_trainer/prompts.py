"""Prompt templates for remote dictation generation."""
from __future__ import annotations

from dictee_trainer.morphology import base_form, word_variants

DICTATION_SYSTEM_PROMPT = """\
Tu es professeur des écoles. Écris un court texte de dictée (3 à 6 phrases) \
de niveau école primaire, simple et compréhensible par des enfants.

Règles :
1. Utilise CHAQUE mot de la liste exactement une fois, ni plus ni moins.
2. Accorde chaque mot correctement (masculin/féminin, singulier/pluriel) en \
choisissant l'une des formes proposées.
3. N'ajoute pas de mot de la liste qui n'est pas demandé et ne modifie pas \
l'orthographe des formes proposées.
4. Le texte doit raconter une petite histoire cohérente.
5. Réponds uniquement avec le texte de la dictée, sans titre, sans liste, \
sans mise en forme ni commentaire.
"""

DICTATION_USER_PROMPT = """\
Mots à placer dans la dictée ({count}) :
{word_lines}
"""


def format_word_hints(words: list[str]) -> str:
    lines = []
    for w in words:
        base = base_form(w)
        others = sorted(v for v in word_variants(w) if v not in (w, base))
        if others:
            lines.append(f"- {base} (formes possibles : {', '.join(others)})")
        else:
            lines.append(f"- {base}")
    return "\n".join(lines)


def build_dictation_prompt(words: list[str]) -> str:
    return DICTATION_USER_PROMPT.format(count=len(words), word_lines=format_word_hints(words))
