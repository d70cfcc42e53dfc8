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

"""Line-of-sight occlusion, link budget and the visibility engine"""

from .engine import VisibilityEngine, results_to_dataframe
from .link_budget import carrier_to_noise_density, free_space_path_loss, signal_strength
from .occlusion import is_occluded

__all__ = [
    'VisibilityEngine',
    'carrier_to_noise_density',
    'free_space_path_loss',
    'is_occluded',
    'results_to_dataframe',
    'signal_strength',
]
