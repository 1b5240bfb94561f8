"""Configuration constants for the spiral galaxy generator."""

# Galaxy parameters (defaults)
COUNT = 100000  # Number of particles
SIZE = 0.01  # Rendered point size (scene units)
RADIUS = 5.0  # Maximum galaxy radius
BRANCHES = 3  # Number of spiral arms
SPIN = 1.0  # Angular twist per unit radius
RANDOMNESS = 0.2  # Exposed control, not used by the jitter formula
RANDOMNESS_POWER = 3.0  # Jitter exponent; higher values cluster tighter
INSIDE_COLOR = "#ff6030"  # Color at the galaxy center
OUTSIDE_COLOR = "#1b3984"  # Color at the galaxy rim

# Bounds used by the parameter panel: name -> (min, max, keyboard step)
PARAMETER_BOUNDS = {
    "count": (100, 1000000, 100),
    "size": (0.001, 0.1, 0.001),
    "radius": (0.01, 20.0, 0.1),
    "branches": (2, 20, 1),
    "spin": (-5.0, 5.0, 0.1),
    "randomness": (0.0, 2.0, 0.05),
    "randomness_power": (1.0, 10.0, 0.25),
}

# Seconds without further edits before the panel triggers regeneration
SETTLE_DELAY = 0.4

# Visualization parameters
CAMERA_DISTANCE = 9.0  # Initial camera distance
CAMERA_FOV = 75.0  # Field of view in degrees
CAMERA_AZIMUTH = 45.0
CAMERA_ELEVATION = 35.0
WINDOW_SIZE = (1200, 800)

# File paths
SAVE_DIRECTORY = "saved_presets"

# Help text (used in both CLI --help and in-app H key overlay)
HELP_CONTENT = (
    "--- Controls ---\n"
    "Mouse drag: Orbit view\n"
    "Scroll wheel: Zoom in/out\n"
    "Tab: Select next parameter\n"
    "Up/Down: Adjust selected parameter\n"
    "G: Regenerate with new random draws\n"
    "Z: Reset parameters to defaults\n"
    "S: Save parameter preset\n"
    "R: Reset camera\n"
    "F: Toggle fullscreen\n"
    "C: Toggle particle colors\n"
    "Q: Quit\n"
    "H: Toggle this help"
)
