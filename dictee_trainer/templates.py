"""Story shapes and filler sentences for local dictation synthesis.

Each placeholder ``{word}`` takes one vocabulary word.  No sentence starts
with a placeholder: the embedded form must appear exactly as chosen, so it
is never re-capitalised.
"""
from __future__ import annotations

from dataclasses import dataclass

PLACEHOLDER = "{word}"


@dataclass(frozen=True)
class TemplateSentence:
    text: str
    role: str | None = None  # None: any variant | "base" | "plural"

    @property
    def slot_offset(self) -> int:
        return self.text.index(PLACEHOLDER)

    def fill(self, form: str) -> str:
        return self.text.replace(PLACEHOLDER, form, 1)


@dataclass(frozen=True)
class StoryTemplate:
    name: str
    intro: TemplateSentence
    middle: tuple[TemplateSentence, ...]
    closing: str


STORY_TEMPLATES: tuple[StoryTemplate, ...] = (
    StoryTemplate(
        name="promenade",
        intro=TemplateSentence("Ce matin, en partant pour l'école, Léa pensait au mot {word}."),
        middle=(
            TemplateSentence("Sur le chemin, elle a aperçu quelque chose qui lui rappelait {word}."),
            TemplateSentence("Arrivée en classe, elle a écrit {word} au tableau."),
            TemplateSentence("Ses camarades ont aussitôt parlé de {word}."),
        ),
        closing="Le soir, elle a tout raconté à ses parents.",
    ),
    StoryTemplate(
        name="grenier",
        intro=TemplateSentence("Un jour de pluie, Tom est monté au grenier et il a trouvé {word}."),
        middle=(
            TemplateSentence("Dans une vieille malle, il y avait aussi des {word}.", role="plural"),
            TemplateSentence("Son grand-père lui a expliqué l'histoire de {word}."),
        ),
        closing="Depuis ce jour, Tom adore les après-midi pluvieux.",
    ),
    StoryTemplate(
        name="foret",
        intro=TemplateSentence("Pendant les vacances, nous sommes partis en forêt pour chercher {word}."),
        middle=(
            TemplateSentence("Au bord du ruisseau, mon frère a remarqué {word}."),
            TemplateSentence("Plus loin, nous avons dessiné {word} dans notre carnet."),
            TemplateSentence("Au retour, papa a parlé longtemps de {word}."),
        ),
        closing="Nous sommes rentrés fatigués mais très contents.",
    ),
    StoryTemplate(
        name="marche",
        intro=TemplateSentence("Samedi, au marché, maman m'a montré {word}."),
        middle=(
            TemplateSentence("Le marchand vendait toutes sortes de {word}.", role="plural"),
            TemplateSentence("Ensuite, ma petite sœur a découvert {word}."),
        ),
        closing="Nous avons promis de revenir la semaine prochaine.",
    ),
    StoryTemplate(
        name="classe",
        intro=TemplateSentence("Aujourd'hui, la maîtresse nous a présenté {word}."),
        middle=(
            TemplateSentence("Pendant la récréation, Hugo ne parlait que de {word}."),
            TemplateSentence("Après la cantine, nous avons lu un texte sur {word}."),
            TemplateSentence("Avant de partir, chacun a recopié {word} dans son cahier."),
        ),
        closing="C'était une journée vraiment passionnante.",
    ),
)

FILLER_SENTENCES: tuple[TemplateSentence, ...] = (
    TemplateSentence("Plus tard, quelqu'un a mentionné {word}."),
    TemplateSentence("Il ne fallait surtout pas oublier {word}."),
    TemplateSentence("Tout le monde se souvenait de {word}."),
    TemplateSentence("Sur une affiche, on pouvait lire {word}."),
    TemplateSentence("Dans un livre, il était question de {word}."),
    TemplateSentence("Enfin, on a encore entendu parler de {word}."),
)
