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
""" class orthomps.Index """
from __future__ import annotations
from dataclasses import dataclass, field
from itertools import count
from ._tests import OrthompsError

__all__ = ['Index', 'Link', 'Site']

Link = 'Link'
Site = 'Site'

_ids = count(1)


@dataclass(frozen=True, repr=False)
class Index:
    r"""
    :class:`Index` is a hashable `dataclass <https://docs.python.org/3/library/dataclasses.html>`_
    labeling one leg of a :class:`orthomps.Tensor`.

    Two indices are equal when they share the identity ``id`` and the prime level ``plev``.
    Tensors are contracted over all equal indices.

    Parameters
    ----------
    dim : int
        Dimension of the vector space.
    kind : str
        ``'Link'`` for virtual (bond) indices or ``'Site'`` for physical indices.
    name : str
        Label used for printing.
    qns : Sequence[tuple[orthomps.sym.QN, int]] | None
        Optional quantum-number sectors ``(qn, block_dim)``, with block dimensions adding up to ``dim``.
        They are carried along, but never inspected.
    """
    dim: int = field(compare=False)
    kind: str = field(default=Link, compare=False)
    name: str = field(default='', compare=False)
    qns: tuple = field(default=None, compare=False)
    plev: int = 0
    id: int = field(default_factory=lambda: next(_ids))

    def __post_init__(self):
        if int(self.dim) != self.dim or self.dim <= 0:
            raise OrthompsError('Index dimension should be a positive int.')
        object.__setattr__(self, "dim", int(self.dim))
        if self.kind not in (Link, Site):
            raise OrthompsError(f"Index kind should be '{Link}' or '{Site}'.")
        if self.qns is not None:
            qns = tuple((qn, int(d)) for qn, d in self.qns)
            if sum(d for _, d in qns) != self.dim:
                raise OrthompsError('Dimensions of quantum-number sectors do not add up to dim.')
            object.__setattr__(self, "qns", qns)

    def __str__(self):
        return f"({self.name or self.kind},{self.dim},id={self.id}){chr(39) * self.plev}"

    def __repr__(self):
        return self.__str__()

    def prime(self, n=1) -> Index:
        """ Copy with prime level raised by ``n``. """
        return Index(self.dim, self.kind, self.name, self.qns, self.plev + n, self.id)

    def noprime(self) -> Index:
        """ Copy with prime level set to 0. """
        return Index(self.dim, self.kind, self.name, self.qns, 0, self.id)

    def sim(self) -> Index:
        """ Index with the same dimension, kind and sectors, but a new identity. """
        return Index(self.dim, self.kind, self.name, self.qns)

    def direct_sum(self, other, name='') -> Index:
        """
        New link index spanning the direct sum of two spaces.

        Sectors of ``self`` come first, those of ``other`` follow.
        Quantum numbers survive only if both indices carry them.
        """
        qns = None
        if self.qns is not None and other.qns is not None:
            qns = self.qns + other.qns
        return Index(self.dim + other.dim, Link, name, qns)
