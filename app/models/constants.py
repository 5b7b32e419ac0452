# app/models/constants.py

# Landmark phrases, in priority order. Matching is a plain substring test.
UPPER_PHRASES = (
    "Analysez les problèmes",
    "Analyse des performances",
)
LOWER_PHRASES = (
    "STATISTIQUES",
    "Développer la vue",
    "Les valeurs sont estimées",
)

# Lower landmarks are only searched below this fraction of the image height
LOWER_SEARCH_RATIO = 0.7
# Pixels added below a matched lower landmark
LOWER_OFFSET_PX = 200

# Fallback bounds, as fractions of the image height
DEFAULT_UPPER_RATIO = 0.15
DEFAULT_LOWER_RATIO = 0.85
