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
""" Overlaps <psi|phi> of two Mps's. """
from __future__ import annotations
from warnings import warn
from ... import OrthompsError, Link
from ._mps import Mps


def overlap_c(psi: Mps, phi: Mps) -> complex:
    r"""
    Calculate overlap :math:`\langle \psi|\phi \rangle`.
    Conjugate of ``psi`` is computed internally.

    The chain is contracted from the first to the last site.
    Link indices of ``psi`` are primed, so that ``psi`` and ``phi`` can share them,
    e.g., for ``psi`` being a copy of ``phi``. The two states must share site indices.

    Parameters
    -----------
    psi: orthomps.tn.mps.Mps
        Mps which will be conjugated.

    phi: orthomps.tn.mps.Mps
    """
    N = psi.N
    if N != phi.N:
        raise OrthompsError(f"overlap: Mps's have different number of sites, {N} != {phi.N}.")
    if N == 0:
        raise OrthompsError("overlap: Mps has no sites.")
    if N == 1:
        return complex((psi[0].conj() * phi[0]).item())

    L = phi[0] * psi[0].prime(kind=Link).conj()
    for n in psi.sweep(to='last', df=1, dl=1):
        L = L * phi[n]
        L = L * psi[n].prime(kind=Link).conj()
    L = L * phi[psi.last]
    L = L * psi[psi.last].prime(kind=Link).conj()
    return complex(L.item())


def overlap(psi: Mps, phi: Mps) -> float:
    r"""
    Real part of :meth:`overlap_c`.

    Warns if the dropped imaginary part is not negligible
    compared to the real part.
    """
    z = overlap_c(psi, phi)
    if abs(z.imag) > 1e-12 * abs(z.real):
        warn(f"overlap: dropping non-zero imaginary part (={z.imag:.5E}) of the overlap.", RuntimeWarning)
    return z.real
