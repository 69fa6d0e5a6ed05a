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
""" Verification of the canonical form declared by orthogonality limits. """
from __future__ import annotations
import logging
from ... import OrthompsError, delta
from ._mps import Mps

logger = logging.getLogger(__name__)

ORTHO_TOL = 1e-13


def check_ortho(psi: Mps, n: int, left=True) -> bool:
    r"""
    Check if tensor at site ``n`` is an isometry.

    For ``left=True``, contracting the tensor with its conjugate over all indices
    but the link to site ``n + 1`` should give identity on that link.
    For ``left=False``, the link to site ``n - 1`` is used.

    Failure is logged at warning level and ``False`` is returned.
    """
    link = psi.right_link_ind(n) if left else psi.left_link_ind(n)
    if link is None:
        raise OrthompsError(f"check_ortho: site {n} has no {'right' if left else 'left'} link.")
    A = psi[n]
    rho = A * A.prime(link, n=4).conj()
    Id = delta(A.config, inds=(link, link.prime(4)), dtype='complex128' if A.is_complex() else 'float64')
    nd = (rho - Id).norm()
    if nd >= ORTHO_TOL:
        logger.warning("check_ortho: tensor at site %d failed to be %s ortho; norm(Diff) = %.3e; threshold = %.3e",
                       n, 'left' if left else 'right', nd, ORTHO_TOL)
        return False
    return True


def check_canonical(psi: Mps) -> bool:
    r"""
    Check that all tensors at ``n <= left_lim`` are left-isometric,
    and all tensors at ``n >= right_lim`` are right-isometric.
    """
    ok = True
    for n in range(psi.first, min(psi.left_lim, psi.last - 1) + 1):
        ok = check_ortho(psi, n, left=True) and ok
    for n in range(max(psi.right_lim, psi.first + 1), psi.N):
        ok = check_ortho(psi, n, left=False) and ok
    return ok
