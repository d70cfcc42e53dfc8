# Copyright 2024 inuex35
#
# Licensed under the Apache License, Version 2.0 (the "License");
# you may not use this file except in compliance with the License.
# You may obtain a copy of the License at
#
#     http://www.apache.org/licenses/LICENSE-2.0
#
# Unless required by applicable law or agreed to in writing, software
# distributed under the License is distributed on an "AS IS" BASIS,
# WITHOUT WARRANTIES OR CONDITIONS OF ANY KIND, either express or implied.
# See the License for the specific language governing permissions and
# limitations under the License.

"""
satvis - Airborne GNSS Satellite Visibility

A Python library for predicting which BeiDou/GPS satellites an aircraft can
see: broadcast orbit propagation, geodetic/ECEF/body-frame transformations,
Earth occlusion of the line of sight and free-space link budgets.
"""

__version__ = "1.0.0"
__author__ = "satvis Development Team"
__title__ = "satvis"
__description__ = "Airborne GNSS satellite visibility and link budget"

from .core import *
from .satellite import *
from .coordinate import *
from .attitude import *
from .geometry import *
from .visibility import *
from .config import (
    AntennaConfig,
    ConstellationConfig,
    SignalConfig,
    VisibilityConfig,
    load_config,
)
