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
""" Contractions of orthomps tensors. """
from __future__ import annotations
from ._tests import OrthompsError, _test_can_be_combined

__all__ = ['contract']


def contract(a, b) -> orthomps.Tensor:
    r"""
    Contract tensors ``a`` and ``b`` over all indices they share.

    Indices are shared if they have the same identity and prime level.
    Without common indices, the result is the outer product.
    The remaining indices of ``a`` come first in the result, followed by those of ``b``.

    One can equivalently call ``a * b``.

    Parameters
    ----------
    a, b: orthomps.Tensor
    """
    _test_can_be_combined(a, b)
    common = [ind for ind in a.inds if ind in b.inds]
    ia = tuple(a.inds.index(ind) for ind in common)
    ib = tuple(b.inds.index(ind) for ind in common)
    if any(a.inds[i].dim != b.inds[j].dim for i, j in zip(ia, ib)):
        raise OrthompsError('Dimensions of contracted indices do not match.')
    inds = tuple(ind for ind in a.inds if ind not in common) + \
           tuple(ind for ind in b.inds if ind not in common)
    if len(set(inds)) != len(inds):
        raise OrthompsError(f'Contraction would produce repeated index among {inds}.')
    data = a.config.backend.tensordot(a._data, b._data, axes=(ia, ib))
    return a._replace(inds=inds, data=data)
