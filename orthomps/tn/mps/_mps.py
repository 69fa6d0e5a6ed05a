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
""" Mps structure, its orthogonality limits, and decomposition of two-site tensors. """
from __future__ import annotations
import logging
from numbers import Integral, Number
from typing import Iterator, Sequence
from ...tensor import Tensor, OrthompsError, Link, svd, denmat_decomp, Spectrum, MIN_CUT


logger = logging.getLogger(__name__)


def default_opts() -> dict:
    r"""
    Options recognized by :meth:`Mps.svd_bond_` and functions built on it.

        * ``noise`` - weight of the density-matrix perturbation; the default is 0.
        * ``cutoff`` - largest discarded weight relative to the total weight; the default is ``MIN_CUT``.
        * ``use_svd`` - force exact SVD; the default is ``False``.
        * ``normalize`` - normalize the new orthogonality center; the default is ``False``.
        * ``D_total`` - largest bond dimension; unbounded by default.
        * ``D_min`` - smallest bond dimension; the default is 1.
    """
    return {'noise': 0., 'cutoff': MIN_CUT, 'use_svd': False, 'normalize': False,
            'D_total': float('inf'), 'D_min': 1}


class Mps:
    # The basic structure of MPS with `N` sites and open boundary conditions.

    def __init__(self, N=0, sites=None):
        r"""
        Initialize empty MPS for system of `N` sites. Empty MPS has no tensors assigned.

        Mps tensors (sites) are indexed by integers :math:`0,1,2,\ldots,N-1`,
        where :math:`0` corresponds to the ``'first'`` site.
        They can be accessed with ``[]`` operator.
        Neighbouring tensors share a link index; each tensor carries one or more site indices.

        Two integers, ``left_lim`` and ``right_lim`` (:math:`-1 \le` ``left_lim`` :math:`\le` ``right_lim`` :math:`\le N`),
        track the canonical form. Every tensor at ``n <= left_lim`` is left-isometric,
        and every tensor at ``n >= right_lim`` is right-isometric.
        Tensors in between are unconstrained. The orthogonality center is well defined
        if ``left_lim + 1 == right_lim - 1``.

        Parameters
        ----------
        N: int
            Number of sites. Ignored if ``sites`` are provided.

        sites: orthomps.tn.mps.SiteSet | None
            Site indices of the chain. Default-constructed Mps has none attached.
        """
        if sites is not None:
            N = len(sites)
        if not isinstance(N, Integral) or N < 0:
            raise OrthompsError('Number of Mps sites N should be a non-negative integer.')
        self._N = N
        self._sites = sites
        self.A = {i: None for i in range(N)}  # dict of mps tensors; indexed by integers
        self._left_lim = -1
        self._right_lim = N

    @property
    def first(self):
        return 0

    @property
    def last(self):
        return self._N - 1

    @property
    def N(self):
        return self._N

    def __len__(self):
        return self._N

    @property
    def sites(self):
        """ Attached :class:`orthomps.tn.mps.SiteSet`. """
        if self._sites is None:
            raise OrthompsError("Mps SiteSet is default-initialized.")
        return self._sites

    @property
    def left_lim(self) -> int:
        """ All tensors at ``n <= left_lim`` are left-isometric. """
        return self._left_lim

    @property
    def right_lim(self) -> int:
        """ All tensors at ``n >= right_lim`` are right-isometric. """
        return self._right_lim

    def set_lims_(self, left_lim, right_lim) -> None:
        r"""
        Declare orthogonality limits of tensors assigned by hand.
        """
        if not -1 <= left_lim <= right_lim <= self.N:
            raise OrthompsError(f"Orthogonality limits should satisfy -1 <= left_lim <= right_lim <= N; got {left_lim}, {right_lim}.")
        self._left_lim, self._right_lim = left_lim, right_lim

    def sweep(self, to='last', df=0, dl=0) -> Iterator[int]:
        r"""
        Generator of indices of all sites going from the first site to the last site, or vice-versa.

        Parameters
        ----------
        to: str
            'first' or 'last'.
        df: int
            shift iterator by :math:`{\rm df}\ge 0` from the first site.
        dl: int
            shift iterator by :math:`{\rm dl}\ge 0` from the last site.
        """
        if to == 'last':
            return range(df, self.N - dl)
        if to == 'first':
            return range(self.N - 1 - dl, df - 1, -1)
        raise OrthompsError('"to" in sweep should be in "first" or "last"')

    def __getitem__(self, n) -> Tensor:
        """ Return tensor corresponding to n-th site."""
        try:
            return self.A[n]
        except KeyError as e:
            raise OrthompsError(f"Mps does not have site with index {n}") from e

    def __setitem__(self, n, tensor):
        """
        Assign tensor to n-th site of Mps.

        Orthogonality limits are pulled back so that site ``n`` is no longer assumed isometric.
        """
        if not isinstance(n, Integral) or n < self.first or n > self.last:
            raise OrthompsError("Mps: n should be an integer in 0, 1, ..., N-1")
        if not isinstance(tensor, Tensor):
            raise OrthompsError("Mps: only orthomps.Tensor can be assigned to a site.")
        if n <= self._left_lim:
            self._left_lim = n - 1
        if n >= self._right_lim:
            self._right_lim = n + 1
        self.A[n] = tensor

    def link_ind(self, b):
        r"""
        Link index shared by tensors at sites ``b`` and ``b + 1``.

        Return ``None`` at the ends of the chain or if the two tensors share no link.
        """
        if b < self.first or b >= self.last:
            return None
        return self.A[b].common_index(self.A[b + 1], kind=Link)

    def right_link_ind(self, n):
        """ Link index between sites ``n`` and ``n + 1``. """
        return self.link_ind(n)

    def left_link_ind(self, n):
        """ Link index between sites ``n - 1`` and ``n``. """
        return self.link_ind(n - 1)

    def _set_bond(self, b):
        if not isinstance(b, Integral) or b < self.first or b >= self.last:
            raise OrthompsError(f"Bond b={b} is outside of the range 0, 1, ..., N-2.")

    def svd_bond_(self, b, AA, to='last', PH=None, opts=None) -> Spectrum:
        r"""
        Split tensor ``AA`` into tensors at sites ``b`` and ``b + 1``, truncating the bond,
        and update orthogonality limits.

        ``AA`` should be a (possibly modified) product of the tensors at ``b`` and ``b + 1``;
        its indices shared with the old tensor at ``b`` go to the new tensor at ``b``.

        Two strategies are used. Exact SVD is used if ``opts['use_svd']``,
        or if there is no noise and ``opts['cutoff'] < 1e-12``.
        The singular values are absorbed into the tensor in the direction of the sweep,
        leaving the other one exactly isometric.
        Otherwise, the reduced density matrix of the side to become isometric is diagonalized
        (see :meth:`orthomps.linalg.denmat_decomp`), optionally with a perturbation
        weighted by ``opts['noise']`` and informed by projector ``PH``.

        Sweeping ``to='last'`` requires ``b - 1 <= left_lim``; sweeping ``to='first'`` requires ``b + 2 >= right_lim``.
        Otherwise, the canonical form would silently get corrupted, and an error is raised.

        Parameters
        ----------
        b: int
            Bond between sites ``b`` and ``b + 1``.

        AA: orthomps.Tensor
            Two-site tensor.

        to: str
            ``'last'`` (left to right) or ``'first'`` (right to left).

        PH: any
            Optional projector or effective Hamiltonian, used only by the density-matrix decomposition.

        opts: dict
            See :meth:`default_opts`.

        Returns
        -------
        Spectrum
            Kept weights and discarded weight.
        """
        self._set_bond(b)
        if to == 'last':
            if b - 1 > self._left_lim:
                logger.error("svd_bond_: b=%d, left_lim=%d", b, self._left_lim)
                raise OrthompsError(f"svd_bond_: b - 1 > left_lim for b={b}, left_lim={self._left_lim}.")
        elif to == 'first':
            if b + 2 < self._right_lim:
                logger.error("svd_bond_: b=%d, right_lim=%d", b, self._right_lim)
                raise OrthompsError(f"svd_bond_: b + 2 < right_lim for b={b}, right_lim={self._right_lim}.")
        else:
            raise OrthompsError('"to" should be in "first" or "last"')

        opts = {**default_opts(), **(opts or {})}
        noise, cutoff = opts['noise'], opts['cutoff']
        trunc = {'cutoff': cutoff, 'D_total': opts['D_total'], 'D_min': opts['D_min']}
        inds = tuple(ind for ind in AA.inds if ind in self.A[b].inds)

        if opts['use_svd'] or (noise == 0 and cutoff < 1e-12):
            method = 'svd'
            U, S, V, spec = svd(AA, inds, fix_signs=True, **trunc)
            if opts['normalize']:
                nS = S.norm()
                if nS > 1e-16:
                    S = S / nS
            if to == 'last':
                self.A[b], self.A[b + 1] = U, S * V
            else:
                self.A[b], self.A[b + 1] = U * S, V
        else:
            method = 'denmat'
            Al, Ar, spec = denmat_decomp(AA, inds, to=to, PH=PH, noise=noise, **trunc)
            if opts['normalize']:
                if to == 'last':
                    nrm = Ar.norm()
                    if nrm > 1e-16:
                        Ar = Ar / nrm
                else:
                    nrm = Al.norm()
                    if nrm > 1e-16:
                        Al = Al / nrm
            self.A[b], self.A[b + 1] = Al, Ar

        if to == 'last':
            self._left_lim = b
            self._right_lim = max(self._right_lim, b + 2)
        else:
            self._left_lim = min(self._left_lim, b - 1)
            self._right_lim = b + 1

        logger.debug("svd_bond_: b=%d to=%s method=%s D=%d truncerr=%.3e",
                     b, to, method, spec.D, spec.truncerr)
        return spec

    def position_(self, n, opts=None) -> float:
        r"""
        Move the orthogonality center to site ``n``,
        splitting neighbouring two-site tensors with :meth:`svd_bond_`.

        Without ``opts``, decompositions are exact (no truncation beyond numerical zeros).

        Returns the largest discarded weight encountered.
        """
        if not isinstance(n, Integral) or n < self.first or n > self.last:
            raise OrthompsError(f"position_: n={n} should be in 0, 1, ..., N-1")
        if self.N == 1:
            self._left_lim, self._right_lim = -1, 1
            return 0.
        truncerr = 0.
        while self._left_lim < n - 1:
            b = self._left_lim + 1
            spec = self.svd_bond_(b, self.A[b] * self.A[b + 1], to='last', opts=opts)
            truncerr = max(truncerr, spec.truncerr)
        while self._right_lim > n + 1:
            b = self._right_lim - 2
            spec = self.svd_bond_(b, self.A[b] * self.A[b + 1], to='first', opts=opts)
            truncerr = max(truncerr, spec.truncerr)
        logger.info("position_: n=%d max_D=%d truncerr=%.3e", n, self.max_m(), truncerr)
        return truncerr

    def orthogonalize_(self, opts=None) -> float:
        r"""
        Sweep through the Mps and put it in right canonical form,
        with the orthogonality center at the first site.

        The state is first brought exactly to left canonical form;
        the sweep back towards the first site truncates the bonds according to ``opts``.
        The truncation is effective as it is done in the canonical form.

        Returns the largest discarded weight encountered.
        """
        self.position_(self.last)
        truncerr = self.position_(self.first, opts=opts)
        logger.info("orthogonalize_: N=%d max_D=%d truncerr=%.3e", self.N, self.max_m(), truncerr)
        return truncerr

    def is_ortho(self) -> bool:
        """ Whether the orthogonality center is well defined. """
        return self._left_lim + 1 == self._right_lim - 1

    def ortho_center(self) -> int:
        """ Position of the orthogonality center; raise error if it is not well defined. """
        if not self.is_ortho():
            raise OrthompsError("Orthogonality center not well defined.")
        return self._left_lim + 1

    def norm(self) -> Number:
        r"""
        Norm of the Mps, equal to the norm of the tensor at the orthogonality center.
        """
        if not self.is_ortho():
            raise OrthompsError("Mps must have well-defined orthogonality center to compute norm; "
                                "call position_(n) or orthogonalize_() to set it.")
        return self.A[self.ortho_center()].norm()

    def normalize_(self) -> Number:
        r"""
        Normalize the Mps in place, dividing the tensor at the orthogonality center by the norm.

        Returns the norm before normalization.
        """
        nrm = self.norm()
        if abs(nrm) < 1e-20:
            raise OrthompsError("Zero norm.")
        n = self.ortho_center()
        self.A[n] = self.A[n] / nrm
        return nrm

    def is_complex(self) -> bool:
        """ Whether any tensor has complex data. """
        return any(self.A[n].is_complex() for n in self.sweep())

    def get_bond_dimensions(self) -> Sequence[int]:
        r"""
        Returns bond dimensions of all virtual spaces along Mps from
        the first to the last site, including trivial leftmost and rightmost virtual spaces.
        This gives a tuple with N+1 elements.
        """
        Ds = [1]
        for b in self.sweep(to='last', dl=1):
            link = self.link_ind(b)
            Ds.append(1 if link is None else link.dim)
        Ds.append(1)
        return tuple(Ds)

    def average_m(self) -> float:
        """ Average bond dimension over the N - 1 bonds. """
        if self.N < 2:
            return 0.
        Ds = self.get_bond_dimensions()[1:-1]
        return sum(Ds) / len(Ds)

    def max_m(self) -> int:
        """ Largest bond dimension. """
        if self.N < 2:
            return 0
        return max(self.get_bond_dimensions()[1:-1])

    def shallow_copy(self) -> Mps:
        r"""
        New instance of :class:`orthomps.tn.mps.Mps` pointing to the same tensors as the old one.

        Tensors are never modified in place, so shallow copy is usually sufficient to retain the old Mps.
        """
        phi = Mps(N=self.N, sites=self._sites)
        phi.A = dict(self.A)
        phi._left_lim, phi._right_lim = self._left_lim, self._right_lim
        return phi

    def copy(self) -> Mps:
        r"""
        Makes a copy of Mps by :meth:`copying<orthomps.Tensor.copy>` all :class:`orthomps.Tensor`'s
        into a new and independent :class:`orthomps.tn.mps.Mps`.
        """
        phi = self.shallow_copy()
        for ind, ten in phi.A.items():
            phi.A[ind] = ten.copy()
        return phi

    def conj(self) -> Mps:
        """ Makes a conjugation of the object. Canonical form is preserved. """
        phi = self.shallow_copy()
        for ind, ten in phi.A.items():
            phi.A[ind] = ten.conj()
        return phi

    def __mul__(self, number) -> Mps:
        """ New Mps with the tensor at the first unconstrained site multiplied by a scalar. """
        if self.N == 0:
            raise OrthompsError("Cannot multiply Mps with no sites.")
        phi = self.shallow_copy()
        n = min(phi._left_lim + 1, phi.last)
        phi[n] = phi.A[n] * number
        return phi

    def __rmul__(self, number) -> Mps:
        """ New Mps with the tensor at the first unconstrained site multiplied by a scalar. """
        return self.__mul__(number)

    def __array_ufunc__(self, ufunc, method, *inputs, **kwargs):
        """ This is to circumvent problems with np.float64 * Mps. """
        if ufunc.__name__ == 'multiply':
            lhs, rhs = inputs
            return rhs.__mul__(lhs)
        raise OrthompsError(f"Only np.float * Mps is supported; {ufunc.__name__} was called.")

    def __neg__(self) -> Mps:
        return self.__mul__(-1)

    def __truediv__(self, number) -> Mps:
        """ Divide Mps by a scalar. """
        return self.__mul__(1 / number)

    def __add__(self, phi) -> Mps:
        """ Sum of two Mps's. """
        from ._addition import add  # pylint: disable=C0415
        return add(self, phi)

    def __sub__(self, phi) -> Mps:
        """ Subtraction of two Mps's. """
        from ._addition import add  # pylint: disable=C0415
        return add(self, -phi)
