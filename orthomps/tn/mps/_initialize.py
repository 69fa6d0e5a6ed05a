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
from __future__ import annotations
from numbers import Integral
from functools import reduce
from operator import mul
from ._mps import Mps
from ...initialize import make_config, rand, to_tensor
from ...sym import spin
from ...tensor import Index, Link, Site, OrthompsError


class SiteSet:
    r"""
    Site indices of a chain of ``N`` sites; ``sites[n]`` is the physical index of site ``n``.
    """

    def __init__(self, inds):
        self._inds = tuple(inds)
        if any(not isinstance(ind, Index) or ind.kind != Site for ind in self._inds):
            raise OrthompsError("SiteSet should consist of indices of kind 'Site'.")

    def __len__(self):
        return len(self._inds)

    def __getitem__(self, n) -> Index:
        return self._inds[n]

    def __iter__(self):
        return iter(self._inds)


def spin_half_sites(N, conserve_sz=False) -> SiteSet:
    r"""
    Sites of a spin-1/2 chain, with basis states ordered as ``(Up, Dn)``.

    With ``conserve_sz``, site indices carry sectors of :math:`2 S^z = \pm 1`.
    """
    qns = ((spin(1), 1), (spin(-1), 1)) if conserve_sz else None
    return SiteSet(Index(2, Site, f'S=1/2,n={n}', qns) for n in range(N))


def product_mps(sites, states, config=None) -> Mps:
    r"""
    Generate an Mps with bond dimension 1.

    Parameters
    ----------
    sites: SiteSet
        Site indices.

    states: Sequence[int | Sequence[number]]
        For each site, either the position of a basis state, or a vector of amplitudes.
        If a single entry is given, it is repeated on all sites.

    config: _config | None
        Configuration of created tensors.

    The orthogonality center is placed at the first site:
    the tensors at other sites are normalized, and their norms are absorbed in the first one.
    If site indices carry quantum numbers and basis states are given,
    link indices carry the accumulated quantum number of the sites to their left.
    """
    config = make_config() if config is None else config
    N = len(sites)
    if isinstance(states, Integral) or (len(states) != N and len(states) == 1):
        states = [states if isinstance(states, Integral) else states[0]] * N
    if len(states) != N:
        raise OrthompsError(f"product_mps: got {len(states)} states for {N} sites.")

    vectors = []
    for s, st in zip(sites, states):
        if isinstance(st, Integral):
            if not 0 <= st < s.dim:
                raise OrthompsError(f"product_mps: basis state {st} outside of site dimension {s.dim}.")
            vec = [0.] * s.dim
            vec[st] = 1.
            vectors.append(to_tensor(vec, inds=s, config=config))
        else:
            vectors.append(to_tensor(st, inds=s, config=config))

    with_qns = all(s.qns is not None for s in sites) and all(isinstance(st, Integral) for st in states)
    links, acc = [], None
    for n in range(N - 1):
        qns = None
        if with_qns:
            qn = _basis_qn(sites[n], states[n])
            acc = qn if acc is None else acc + qn
            qns = ((acc, 1),)
        links.append(Index(1, Link, f'l={n}', qns))

    psi = Mps(sites=sites)
    weight = 1.
    for n in psi.sweep(to='first'):
        vec = vectors[n]
        if n > psi.first:
            nrm = vec.norm()
            if nrm < 1e-20:
                raise OrthompsError(f"product_mps: zero vector at site {n}.")
            vec, weight = vec / nrm, weight * nrm
        else:
            vec = vec * weight
        data = config.backend.reshape(vec.data, (1,) * (n > psi.first) + (sites[n].dim,) + (1,) * (n < psi.last))
        inds = ((links[n - 1],) if n > psi.first else ()) + (sites[n],) + ((links[n],) if n < psi.last else ())
        psi.A[n] = vec._replace(inds=inds, data=data)
    if N > 0:
        psi.set_lims_(-1, 1)
    return psi


def _basis_qn(site, state):
    """ Quantum number of the sector containing basis state ``state``. """
    start = 0
    for qn, d in site.qns:
        if start <= state < start + d:
            return qn
        start += d
    raise OrthompsError(f"Basis state {state} outside of site {site}.")


def random_mps(sites, D_total=8, config=None, dtype='float64') -> Mps:
    r"""
    Generate a random Mps with bond dimension up to ``D_total``.

    Bond dimensions are bounded by the dimensions of the Hilbert spaces on both sides of each bond.
    The tensors are not put in canonical form; limits of returned Mps span the whole chain.

    Parameters
    ----------
    sites: SiteSet
        Site indices.
    D_total: int
        Largest bond dimension.
    dtype: str
        Passed to :meth:`orthomps.rand`. Number format, i.e., ``'float64'`` or ``'complex128'``.
    """
    config = make_config() if config is None else config
    N = len(sites)
    links = []
    for n in range(N - 1):
        Dl = reduce(mul, (s.dim for s in sites[:n + 1]), 1)
        Dr = reduce(mul, (s.dim for s in sites[n + 1:]), 1)
        links.append(Index(int(min(D_total, Dl, Dr)), Link, f'l={n}'))

    psi = Mps(sites=sites)
    for n in psi.sweep(to='last'):
        inds = ((links[n - 1],) if n > psi.first else ()) + (sites[n],) + ((links[n],) if n < psi.last else ())
        psi.A[n] = rand(config, inds=inds, dtype=dtype)
    return psi
