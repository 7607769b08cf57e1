"""
Copyright 2026 fiber-ray-optics authors and contributors

Licensed under the Apache License, Version 2.0 (the "License");
you may not use this file except in compliance with the License.
You may obtain a copy of the License at

    http://www.apache.org/licenses/LICENSE-2.0

Unless required by applicable law or agreed to in writing, software
distributed under the License is distributed on an "AS IS" BASIS,
WITHOUT WARRANTIES OR CONDITIONS OF ANY KIND, either express or implied.
See the License for the specific language governing permissions and
limitations under the License.

Constants used throughout the fiber optics calculations.

Physical constants here are approximate. Results computed with
them must stay comparable with earlier versions of the visualizer, so do not
replace them with CODATA values.
"""

# Speed of light in m/s (approximate)
SPEED_OF_LIGHT = 3e8

# Scale factor applied by the modal dispersion formula (result in ns/km)
MODAL_DISPERSION_SCALE = 1e12

# Heuristic distance (km) attributed to each segment of a rendered ray path
# when estimating attenuation. Not physically derived.
REFLECTION_DISTANCE_KM = 0.2

# Upper bound on the number of points produced by generate_ray_path.
# Near-axial launch angles (close to 0 deg) otherwise bounce without limit.
DEFAULT_MAX_RAY_POINTS = 10000

# Boundary snapping / comparison tolerance for path geometry checks
GEOMETRY_TOLERANCE = 1e-9

# Control limits (slider ranges of the interactive front end)
MIN_INCIDENCE_ANGLE = 0.0
MAX_INCIDENCE_ANGLE = 89.0
MIN_SECONDARY_ANGLE = 1.0
MIN_CORE_INDEX = 1.1
MAX_CORE_INDEX = 2.0
MIN_CLADDING_INDEX = 1.0
MIN_INDEX_CONTRAST = 0.01
MIN_ATTENUATION_DB_PER_KM = 0.1
MAX_ATTENUATION_DB_PER_KM = 10.0

# Angle offsets (deg) of the secondary rays drawn around the primary ray
STEP_INDEX_ANGLE_VARIATIONS = (1.5, 3.0)
GRADED_INDEX_ANGLE_VARIATIONS = (0.5, 1.0)

# Number of intensity levels computed for a scene (primary + 4 secondaries)
INTENSITY_LEVELS = 5

# Visualizer geometry (scene units)
FIBER_LENGTH = 700
CORE_HEIGHT = 100
CLADDING_THICKNESS = 20
RAY_START_X = 50
RAY_START_Y = 0
SOURCE_X = 25
CANVAS_WIDTH = 800
CANVAS_HEIGHT = 400
