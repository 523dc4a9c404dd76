# planet_generator/config.py

"""
================================================================================
INTERNAL DEFAULT CONFIGURATION
================================================================================
This module contains the default, fallback internal constants for the planet
generator. These values are used if they are not explicitly provided by the
user's configuration.

DO NOT MODIFY THIS FILE FOR A SPECIFIC SIMULATION.
Instead, pass a configuration dictionary (or a WorldConfig) to the World.
================================================================================
"""

# --- Noise Generation ---
DEFAULT_SEED = 12345
MAX_SEED = 2**64 - 1

# Per-domain seed offsets. Each noise field is seeded with seed + offset.
# Some domains intentionally share an offset with another one (oil/river,
# cloud/volcano, weather/coal, pressure/iron). The shared fields still differ
# because their frequency and noise kind differ. Keep these values as they are:
# changing one changes every world generated from a given seed.
TERRAIN_SEED_OFFSET = 0
MOISTURE_SEED_OFFSET = 1000
TEMPERATURE_VARIATION_SEED_OFFSET = 2000
WIND_SEED_OFFSET = 3000
RIVER_SEED_OFFSET = 4000
VOLCANO_SEED_OFFSET = 5000
COAL_SEED_OFFSET = 6000
IRON_SEED_OFFSET = 7000
OIL_SEED_OFFSET = 4000
CLOUD_SEED_OFFSET = 5000
WEATHER_SEED_OFFSET = 6000
PRESSURE_SEED_OFFSET = 7000

# --- World Scale & Calendar ---
DEFAULT_WORLD_SCALE = 1.0
# Cellular fields hold one feature point per lattice cell around the sphere,
# so their build cost grows steeply with scale. Larger scales are rejected.
MAX_WORLD_SCALE = 10.0
DEFAULT_DAY_OF_YEAR = 172 # Northern summer solstice
DAYS_PER_YEAR = 365
HOURS_PER_DAY = 24.0

# --- Projection ---
# Radius of the virtual sphere that geographic coordinates are projected onto
# before noise sampling. Noise frequencies are expressed against this radius.
SPHERE_RADIUS = 1000.0

# --- Temperature (Celsius) ---
EQUATOR_TEMPERATURE_C = 30.0
POLE_TEMPERATURE_C = -40.0
# Temperature drop in Celsius per 1000m of altitude.
TEMPERATURE_LAPSE_RATE_C_PER_KM = 6.5
# Amplitude of the local temperature noise (+/- this many degrees).
TEMPERATURE_VARIATION_C = 5.0

# --- Terrain (meters) ---
SEA_LEVEL_M = 0.0
MAX_TERRAIN_HEIGHT_M = 8848.0 # Mt. Everest
OCEAN_FLOOR_DEPTH_M = 4000.0
DEEP_OCEAN_DEPTH_M = -1000.0
BEACH_MAX_HEIGHT_M = 5.0
LAND_SHAPING_EXPONENT = 0.7

TERRAIN_FREQUENCY = 0.001
TERRAIN_OCTAVES = 6
TERRAIN_LACUNARITY = 2.0
TERRAIN_GAIN = 0.5

# Level-of-detail octaves added on top of the base terrain when a query asks
# for a detail level above 1.0.
DETAIL_MAX_EXTRA_OCTAVES = 3
DETAIL_INITIAL_AMPLITUDE = 0.3
DETAIL_BLEND_RANGE = 4.0

MOISTURE_FREQUENCY = 0.002
MOISTURE_OCTAVES = 4

# --- Secondary Noise Field Profiles ---
# (frequency, octaves, lacunarity, gain). Frequencies are scaled by world_scale.
TEMPERATURE_VARIATION_NOISE = (0.003, 1, 2.0, 0.5)
WIND_NOISE = (0.004, 3, 2.0, 0.5)
RIVER_NOISE = (0.02, 3, 2.0, 0.5)
COAL_NOISE = (0.006, 4, 2.0, 0.5)
IRON_NOISE = (0.008, 4, 2.0, 0.5)
CLOUD_NOISE = (0.008, 3, 2.0, 0.5)
WEATHER_NOISE = (0.005, 3, 2.0, 0.5)
PRESSURE_NOISE = (0.003, 2, 2.0, 0.5)
# Cellular fields only use a frequency.
VOLCANO_CELL_FREQUENCY = 0.008
OIL_CELL_FREQUENCY = 0.005

# Feature point jitter inside each lattice cell for cellular fields [0, 1].
CELLULAR_JITTER = 0.9

# Offset along z applied to time-varying fields per hour of simulated time.
WEATHER_DRIFT_PER_HOUR = 0.1 * 100.0

# --- Volcanoes ---
VOLCANO_CELL_THRESHOLD = 0.2
VOLCANO_MAX_CONE_HEIGHT_M = 3000.0
VOLCANO_CRATER_START = 0.85
VOLCANO_CRATER_MAX_DIP = 0.4

# --- Atmosphere ---
SEA_LEVEL_PRESSURE_HPA = 1013.25
ATMOSPHERE_SCALE_HEIGHT_M = 8500.0
WEATHER_PRESSURE_AMPLITUDE_HPA = 25.0
SUBTROPICAL_HIGH_AMPLITUDE_HPA = 10.0
PRESSURE_GRADIENT_STEP_DEG = 1.0
# Pressure change (hPa per degree) above which a storm front is reported.
STORM_FRONT_GRADIENT_HPA = 5.0

# --- Precipitation (mm / year) ---
MAX_PRECIPITATION_MM = 4000.0
RAIN_PROBABILITY_BASE = 0.3

# --- Wind (m/s) ---
# Latitude bands: (max latitude, min speed, max speed)
WIND_BANDS = (
    (30.0, 5.0, 8.0),   # Trade winds
    (60.0, 7.0, 12.0),  # Westerlies
    (90.0, 6.0, 8.0),   # Polar easterlies
)
WIND_NOISE_MAX_SPEED = 15.0
WIND_DIRECTION_JITTER_DEG = 60.0
CURRENT_WIND_SHIFT_DEG = 45.0

# --- Astronomy ---
SOLAR_CONSTANT_W_M2 = 1361.0
AXIAL_TILT_DEG = 23.44
ATMOSPHERIC_TRANSMITTANCE = 0.7
MAX_AIRMASS = 10.0
MAX_INSOLATION_W_M2 = 1400.0
CLOUD_INSOLATION_BLOCKING = 0.7

# --- Hydrology ---
FLOW_SAMPLE_STEP_DEG = 0.1
RIVER_FLOW_THRESHOLD = 0.4
MAX_RIVER_WIDTH_M = 500.0
