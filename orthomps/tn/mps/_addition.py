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
""" Sums of Mps's as direct sums of their link spaces. """
from __future__ import annotations
from typing import Sequence
from ... import OrthompsError, Tensor
from ._mps import Mps


def add(psi: Mps, phi: Mps) -> Mps:
    r"""
    Mps representing :math:`|\psi\rangle + |\phi\rangle`.

    Each link of the result spans the direct sum of the corresponding links of ``psi`` and ``phi``,
    so its dimension is the sum of their dimensions.
    Tensors at the first and last site are concatenated along the single link,
    tensors in between are block-diagonal.
    Compression (truncation of bond dimensions) is not performed,
    and the result is not in canonical form (orthogonality limits span the whole chain).

    Both states should have the same number of sites and share site indices.
    """
    if not isinstance(psi, Mps) or not isinstance(phi, Mps):
        raise OrthompsError('add: both arguments should be Mps.')
    if psi.N != phi.N:
        raise OrthompsError(f'add: Mps-s have different number of sites, {psi.N} != {phi.N}.')
    N = psi.N
    res = Mps(N=N, sites=psi._sites)
    if N == 0:
        return res
    if any(psi.A[n] is None or phi.A[n] is None for n in psi.sweep()):
        raise OrthompsError('add: some tensors of the added Mps-s are not assigned.')

    if N == 1:
        res.A[0] = psi[0] + phi[0]
        res.set_lims_(-1, 1)
        return res

    lpsi = [psi.link_ind(b) for b in psi.sweep(dl=1)]
    lphi = [phi.link_ind(b) for b in phi.sweep(dl=1)]
    if any(l is None for l in lpsi + lphi):
        raise OrthompsError('add: neighbouring tensors do not share a link index.')
    links = [a.direct_sum(b, name=f'l={n}') for n, (a, b) in enumerate(zip(lpsi, lphi))]

    for n in res.sweep(to='last'):
        la = (lpsi[n - 1], lphi[n - 1], links[n - 1]) if n > res.first else None
        ra = (lpsi[n], lphi[n], links[n]) if n < res.last else None
        res.A[n] = _block(psi[n], phi[n], la, ra)
    return res


def _block(a, b, left, right) -> Tensor:
    """
    Embed ``a`` and ``b`` in a tensor with links being direct sums of their links;
    ``left`` and ``right`` are triples (link of a, link of b, new link) or None.
    """
    a_links = tuple(x[0] for x in (left, right) if x is not None)
    b_links = tuple(x[1] for x in (left, right) if x is not None)
    site_inds = tuple(ind for ind in a.inds if ind not in a_links)
    if set(site_inds) != set(ind for ind in b.inds if ind not in b_links):
        raise OrthompsError('add: Mps-s do not share site indices.')

    backend = a.config.backend
    order_a, order_b, new_inds = [], [], []
    sl_a, sl_b = [], []
    if left is not None:
        order_a.append(left[0])
        order_b.append(left[1])
        new_inds.append(left[2])
        sl_a.append(slice(0, left[0].dim))
        sl_b.append(slice(left[0].dim, left[2].dim))
    for ind in site_inds:
        order_a.append(ind)
        order_b.append(ind)
        new_inds.append(ind)
        sl_a.append(slice(None))
        sl_b.append(slice(None))
    if right is not None:
        order_a.append(right[0])
        order_b.append(right[1])
        new_inds.append(right[2])
        sl_a.append(slice(0, right[0].dim))
        sl_b.append(slice(right[0].dim, right[2].dim))

    ad = a.permute(*order_a).data
    bd = b.permute(*order_b).data
    dtype = backend.promote_dtype(ad, bd)
    data = backend.block_embed(tuple(ind.dim for ind in new_inds), dtype, [(tuple(sl_a), ad), (tuple(sl_b), bd)])
    return a._replace(inds=tuple(new_inds), data=data)


def sum_states(terms: Sequence[Mps]) -> Mps:
    r"""
    Sum of many Mps's, added pairwise in a balanced tree.

    Each level adds neighbouring pairs; an unpaired last term is carried to the next level unchanged.
    This keeps intermediate bond dimensions smaller than sequential addition.
    A single term is returned as is (not copied); no terms give an empty Mps.
    """
    terms = list(terms)
    if not terms:
        return Mps()
    while len(terms) > 1:
        nterms = [add(terms[j], terms[j + 1]) for j in range(0, len(terms) - 1, 2)]
        if len(terms) % 2 == 1:
            nterms.append(terms[-1])
        terms = nterms
    return terms[0]
