"""Boilerplate labels that introduce an ingredient statement.

Entries are stored already folded (ASCII, lower case) because matching runs
against ICU-folded text; "Ingrédients", "ZUTATEN" and "İçindekiler" all match.
"""

INGREDIENT_LABELS: tuple[str, ...] = (
    # English
    "ingredient list",
    "list of ingredients",
    "ingredients",
    "ingredient",
    "contains",
    "made with",
    "composition",
    "formula",
    # French
    "liste des ingredients",
    "contient",
    # German
    "zutatenliste",
    "zutaten",
    "enthalt",
    "zusammensetzung",
    # Spanish / Portuguese
    "lista de ingredientes",
    "ingredientes",
    "contiene",
    "contem",
    "composicao",
    "composicion",
    # Italian
    "ingredienti",
    # Dutch
    "ingredienten",
    "bevat",
    # Polish
    "skladniki",
    # Turkish
    "icindekiler",
    # Malay / Indonesian
    "bahan-bahan",
    "komposisi",
    "ramuan",
    "bahan",
    # Arabic
    "المكونات",
    "مكونات",
)

# Separators accepted after a label: ASCII and full-width colon, hyphen, en dash.
LABEL_SEPARATORS = ":：-–"
