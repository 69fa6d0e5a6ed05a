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
""" Auxliary functions used by orthomps.Tensor. """
from typing import NamedTuple
from ..backend import backend_np


class _config(NamedTuple):
    backend: any = backend_np
    default_dtype: str = 'float64'


def _clear_inds(inds):
    """ Allow passing a single index or any sequence of indices. """
    if inds is None:
        return ()
    if hasattr(inds, 'dim'):
        return (inds,)
    return tuple(inds)
