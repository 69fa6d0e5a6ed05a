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
""" Two-site gates applied at the orthogonality center. """
from __future__ import annotations
from ... import OrthompsError, Tensor, to_tensor
from ...tensor.linalg import Spectrum
from ._mps import Mps


def two_site_gate(matrix, s1, s2, config=None) -> Tensor:
    r"""
    Gate acting on sites with indices ``s1`` and ``s2``.

    ``matrix`` of shape :math:`(d_1 d_2, d_1 d_2)` (or :math:`(d_1, d_2, d_1, d_2)`)
    maps the input state :math:`|i_1 i_2\rangle` (columns) to the output state (rows).
    Resulting tensor has indices ``(s1', s2', s1, s2)``; primed indices are the output.
    """
    return to_tensor(matrix, inds=(s1.prime(), s2.prime(), s1, s2), config=config)


def apply_gate_(gate, psi: Mps, opts=None) -> Spectrum:
    r"""
    Apply two-site ``gate`` to the orthogonality center of ``psi`` and its right neighbour,
    and split the result back with :meth:`Mps.svd_bond_`.

    The orthogonality center moves to the right neighbour if ``opts['fromleft']`` (the default),
    and stays in place otherwise. Remaining ``opts`` are passed to :meth:`Mps.svd_bond_`.
    """
    opts = {} if opts is None else dict(opts)
    fromleft = opts.pop('fromleft', True)
    c = psi.ortho_center()
    if c >= psi.last:
        raise OrthompsError(f"apply_gate_: orthogonality center {c} should have a right neighbour.")
    AA = (psi[c] * psi[c + 1] * gate).noprime(kind='Site')
    return psi.svd_bond_(c, AA, to='last' if fromleft else 'first', opts=opts)
