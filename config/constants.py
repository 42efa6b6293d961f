# Plafond des labels : 3 octets par cellule (R, G, B), l'alpha appartient au rendu.
LABEL_MAX = 0xFFFFFF
CELL_BYTES = 4
OPAQUE_ALPHA = 255

# Palette par défaut pour la visualisation (format RGB), indexée par label.
DEFAULT_COLORMAP = [
    [255, 255, 255],
    [255, 0, 0],
]

FallbackColor = (255, 0, 255)  # Magenta pour les labels hors palette

# Transparence des couches de visualisation
DEFAULT_BOUNDARY_ALPHA = 127
DEFAULT_VISUALIZATION_ALPHA = 144
HIGHLIGHT_ALPHA_BOOST = 128
ALPHA_STEP = 20

DEFAULT_LABEL = 0
DEFAULT_MAX_HISTORY_RECORD = 10

# Superpixels (SLIC)
DEFAULT_N_SEGMENTS = 400
DEFAULT_COMPACTNESS = 10.0
DEFAULT_RESOLUTION_STEP = 1.5
MIN_N_SEGMENTS = 2
MAX_N_SEGMENTS = 100000

# Boutons pointeur (convention DOM)
LEFT_BUTTON = 0
RIGHT_BUTTON = 2
