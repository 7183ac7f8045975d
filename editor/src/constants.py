"""
Choreo Editor - Constants and Configuration

This module contains all constant values used by the panel store:
- Default panel (stage) size
- Seed dancer and stage-marker templates
- Opacity defaults for the dancer and symbol layers
- Hand sides and lock limits
"""

# ======================================================================
# PANEL DEFAULTS
# ======================================================================

DEFAULT_PANEL_WIDTH = 300
DEFAULT_PANEL_HEIGHT = 300

DEFAULT_PANEL_NOTES = ''

# ======================================================================
# DANCER TEMPLATE
# ======================================================================
# Hand/elbow positions are local to the dancer (before rotation and scale)

DANCER_TEMPLATE = {
    'x': 150,
    'scaleX': 1,
    'scaleY': 1,
    'leftHandPos': {'x': -30, 'y': -40},
    'rightHandPos': {'x': 30, 'y': -40},
    'leftElbowPos': {'x': -45, 'y': -12},
    'rightElbowPos': {'x': 45, 'y': -12},
    'leftHandRotation': 0,
    'rightHandRotation': 0,
    'leftUpperArmThickness': 'thick',
    'leftLowerArmThickness': 'thick',
    'rightUpperArmThickness': 'thick',
    'rightLowerArmThickness': 'thick',
    'headShape': 'Upright',
    'handShape': {'left': 'Waist', 'right': 'Waist'},
}

# Per-dancer overrides for the seed panel (top dancer faces down the stage)
SEED_DANCERS = [
    {'y': 40, 'colour': 'red', 'rotation': 180},
    {'y': 220, 'colour': 'blue', 'rotation': 0},
]

# ======================================================================
# SHAPE TEMPLATE
# ======================================================================

SHAPE_STAGE_X = 'stageX'

SEED_SHAPES = [
    {
        'type': SHAPE_STAGE_X,
        'x': 147,
        'y': 127,
        'rotation': 0,
        'width': 20,
        'height': 20,
        'draggable': True,
        'text': 'X',
        'fontSize': 20,
        'fill': 'black',
    },
]

# ======================================================================
# OPACITY
# ======================================================================

OPACITY_KINDS = ('dancers', 'symbols')
OPACITY_FULL = 1.0
OPACITY_DIMMED = 0.5

# ======================================================================
# HANDS AND LOCKS
# ======================================================================

HAND_SIDES = ('left', 'right')
MIN_LOCK_MEMBERS = 2

# ======================================================================
# LOGGING
# ======================================================================

DEFAULT_LOG_LEVEL = 'WARNING'
LOG_FORMAT = '%(asctime)s - %(name)s - %(levelname)s - %(message)s'
