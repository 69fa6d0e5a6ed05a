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
""" Linalg methods for orthomps.Tensor. """
from __future__ import annotations
from functools import reduce
from operator import mul
from typing import NamedTuple
import numpy as np
from ._auxliary import _clear_inds
from ._index import Index, Link
from ._tests import OrthompsError

__all__ = ['svd', 'denmat_decomp', 'norm', 'truncation', 'Spectrum', 'MIN_CUT']

MIN_CUT = 1e-28  # default cutoff on the relative discarded weight


class Spectrum(NamedTuple):
    r"""
    Outcome of a decomposition across a bond.

    ``eigs`` are the kept density-matrix eigenvalues
    (squares of the normalized singular values), in descending order.
    ``truncerr`` is the discarded weight relative to the total weight.
    """
    eigs: np.ndarray = np.zeros(0)
    truncerr: float = 0.

    @property
    def D(self) -> int:
        """ Number of kept states. """
        return len(self.eigs)

    @property
    def singular_values(self) -> np.ndarray:
        """ Normalized Schmidt values across the bond. """
        return np.sqrt(self.eigs)


def norm(a) -> float:
    r"""
    Frobenius norm of the tensor.
    """
    return a.config.backend.norm(a._data)


def truncation(eigs, cutoff=MIN_CUT, D_total=float('inf'), D_min=1) -> tuple[int, float]:
    r"""
    Decide how many of the weights ``eigs`` (non-negative, in descending order) to keep.

    The smallest weights are discarded as long as the accumulated discarded weight
    does not exceed ``cutoff`` times the total weight, and more than ``D_min`` weights remain.
    At most ``D_total`` weights are kept in any case. At least one weight is always kept.

    Returns
    -------
    number of kept weights, discarded weight relative to the total.
    """
    eigs = np.maximum(np.asarray(eigs, dtype=np.float64), 0.)
    n = len(eigs)
    total = eigs.sum()
    if n == 0:
        return 0, 0.
    D_min = max(1, min(D_min, n))
    D_total = max(D_total, 1)
    if total <= 0:
        return D_min, 0.
    discarded = 0.
    while n > D_total or (n > D_min and discarded + eigs[n - 1] <= cutoff * total):
        discarded += eigs[n - 1]
        n -= 1
    return n, discarded / total


def _as_matrix(a, row_inds):
    """ Data of ``a`` reshaped into matrix with rows labeled by ``row_inds``. """
    row_inds = _clear_inds(row_inds)
    if any(ind not in a.inds for ind in row_inds):
        raise OrthompsError(f'Tensor does not have some of indices {row_inds}.')
    col_inds = tuple(ind for ind in a.inds if ind not in row_inds)
    Dr = reduce(mul, (ind.dim for ind in row_inds), 1)
    Dc = reduce(mul, (ind.dim for ind in col_inds), 1)
    data = a.permute(*(row_inds + col_inds))._data
    return a.config.backend.reshape(data, (Dr, Dc)), row_inds, col_inds


def svd(a, inds, cutoff=MIN_CUT, D_total=float('inf'), D_min=1, fix_signs=False, **kwargs) -> tuple[orthomps.Tensor, orthomps.Tensor, orthomps.Tensor, Spectrum]:
    r"""
    Split tensor into :math:`a = U S V` using exact singular value decomposition (SVD),
    where the columns of `U` and the rows of `V` form orthonormal bases
    and `S` is a positive diagonal matrix. Truncate the result.

    Parameters
    ----------
    inds: orthomps.Index | Sequence[orthomps.Index]
        Indices of ``a`` that go to `U`. The remaining ones go to `V`.

    cutoff: float
        Largest allowed discarded weight, relative to the total weight, see :meth:`truncation`.

    D_total: int
        Largest number of singular values to keep.

    D_min: int
        Smallest number of singular values to keep.

    fix_signs: bool
        Whether or not to fix phases in `U` and `V`,
        so that the largest element in each column of `U` is positive.

    Returns
    -------
    U, S, V, Spectrum
        `U` carries ``inds`` and a new link index `u`;
        `S` carries `u` and another new link index `v`;
        `V` carries `v` and the remaining indices of ``a``.
    """
    backend = a.config.backend
    M, row_inds, col_inds = _as_matrix(a, inds)
    if not row_inds or not col_inds:
        raise OrthompsError('svd requires nonempty sets of indices on both sides.')
    U, S, V = backend.svd(M, fix_signs=fix_signs)

    eigs = backend.to_numpy(S) ** 2
    n, truncerr = truncation(eigs, cutoff=cutoff, D_total=D_total, D_min=D_min)
    total = eigs.sum()
    spec = Spectrum(eigs=eigs[:n] / total if total > 0 else eigs[:n], truncerr=truncerr)

    u = Index(n, Link, kwargs.get('name', ''))
    v = u.sim()
    Ud = backend.reshape(U[:, :n], tuple(ind.dim for ind in row_inds) + (n,))
    Vd = backend.reshape(V[:n, :], (n,) + tuple(ind.dim for ind in col_inds))
    Ut = a._replace(inds=row_inds + (u,), data=Ud)
    St = a._replace(inds=(u, v), data=backend.diag_create(S[:n]))
    Vt = a._replace(inds=(v,) + col_inds, data=Vd)
    return Ut, St, Vt, spec


def _noise_term(a, M, act_inds, to, PH):
    """ Perturbation of the density matrix; from projector if it provides one, random otherwise. """
    backend = a.config.backend
    D = M.shape[0]
    if PH is not None and hasattr(PH, 'delta_rho'):
        drho = PH.delta_rho(a, act_inds, to)
        order = act_inds + tuple(ind.prime() for ind in act_inds)
        drho = backend.reshape(drho.permute(*order)._data, (D, D))
    else:
        dtype = 'complex128' if backend.is_complex(M) else 'float64'
        X = backend.rand((D, D), dtype=dtype)
        drho = X @ backend.conj(X).T
    return (drho + backend.conj(drho).T) / 2


def denmat_decomp(a, inds, to='last', PH=None, noise=0., cutoff=MIN_CUT,
                  D_total=float('inf'), D_min=1, **kwargs) -> tuple[orthomps.Tensor, orthomps.Tensor, Spectrum]:
    r"""
    Split tensor into :math:`a = A B` diagonalizing the reduced density matrix of one side.

    For ``to='last'``, the reduced density matrix :math:`\rho = a a^\dagger` of indices ``inds`` is diagonalized,
    and its leading eigenvectors form the isometry `A`; then :math:`B = A^\dagger a`.
    For ``to='first'``, the roles are reversed: the density matrix of the remaining indices gives isometric `B`,
    and `A` collects the weight.

    A perturbation ``noise * drho`` is added to :math:`\rho` before diagonalization if ``noise > 0``.
    It is provided by ``PH.delta_rho(a, inds, to)`` if projector ``PH`` defines such method;
    otherwise a random positive matrix is used. The perturbation is rescaled to the trace of :math:`\rho`.
    It only changes which states are kept; `A B` is the projection of ``a`` onto the kept states.

    Parameters
    ----------
    inds: orthomps.Index | Sequence[orthomps.Index]
        Indices of ``a`` that go to `A`. The remaining ones go to `B`.

    to: str
        ``'last'`` or ``'first'``, the direction in which the orthogonality center moves.

    PH: any
        Optional projector or effective Hamiltonian.

    noise, cutoff, D_total, D_min: float, float, int, int
        See :meth:`truncation` for ``cutoff``, ``D_total`` and ``D_min``.

    Returns
    -------
    A, B, Spectrum
    """
    if to not in ('last', 'first'):
        raise OrthompsError('"to" should be in "first" or "last"')
    backend = a.config.backend
    inds = _clear_inds(inds)
    rest = tuple(ind for ind in a.inds if ind not in inds)
    act_inds = inds if to == 'last' else rest
    M, act_inds, oth_inds = _as_matrix(a, act_inds)

    rho = M @ backend.conj(M).T
    if noise > 0:
        drho = _noise_term(a, M, act_inds, to, PH)
        tr_rho = backend.real(backend.trace(rho))
        tr_d = backend.real(backend.trace(drho))
        if tr_d > 0:
            rho = rho + (noise * tr_rho / tr_d) * drho

    eigs, U = backend.eigh(rho)
    eigs = backend.to_numpy(backend.real(eigs))
    n, truncerr = truncation(eigs, cutoff=cutoff, D_total=D_total, D_min=D_min)
    total = np.maximum(eigs, 0.).sum()
    kept = np.maximum(eigs[:n], 0.)
    spec = Spectrum(eigs=kept / total if total > 0 else kept, truncerr=truncerr)

    l = Index(n, Link, kwargs.get('name', ''))
    U = U[:, :n]
    Iso = a._replace(inds=act_inds + (l,), data=backend.reshape(U, tuple(ind.dim for ind in act_inds) + (n,)))
    W = backend.conj(U).T @ M
    Oth = a._replace(inds=(l,) + oth_inds, data=backend.reshape(W, (n,) + tuple(ind.dim for ind in oth_inds)))
    if to == 'last':
        return Iso, Oth, spec
    return Oth, Iso, spec
