# Copyright 2024 The orthomps Authors. All Rights Reserved.
#
# Licensed under the Apache License, Version 2.0 (the "License");
# you may not use this file except in compliance with the License.
# You may obtain a copy of the License at
#
#     https://www.apache.org/licenses/LICENSE-2.0
#
# Unless required by applicable law or agreed to in writing, software
# distributed under the License is distributed on an "AS IS" BASIS,
# WITHOUT WARRANTIES OR CONDITIONS OF ANY KIND, either express or implied.
# See the License for the specific language governing permissions and
# limitations under the License.
# ==============================================================================
""" Matrix product states (Mps) kept in canonical form, employing orthomps.Tensor. """
from ._mps import Mps, default_opts
from ._measure import overlap_c, overlap
from ._checks import check_ortho, check_canonical
from ._addition import add, sum_states
from ._gates import two_site_gate, apply_gate_
from ._initialize import SiteSet, spin_half_sites, product_mps, random_mps
