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
""" Quantum number labels attached to index sectors. """
from __future__ import annotations
from typing import NamedTuple

__all__ = ['QN', 'QNVal', 'spin', 'boson', 'fermion', 'clock']

NQN = 4  # maximal number of components of a QN


class QNVal(NamedTuple):
    r"""
    Single component of a quantum number.

    ``mod == 1`` is the :math:`Z` addition rule, ``mod > 1`` is :math:`Z_{\rm mod}`,
    negative ``mod`` marks a fermionic component with the same rule as ``|mod|``,
    and ``mod == 0`` is an unused component.
    """
    val: int = 0
    mod: int = 0

    @classmethod
    def make(cls, val, mod=1) -> QNVal:
        am = abs(mod)
        if am > 1:
            val = ((val % am) + am) % am
        return cls(val=val, mod=mod)

    def __neg__(self) -> QNVal:
        return QNVal.make(-self.val, self.mod)


class QN:
    """
    Value type labeling a symmetry sector, with up to four components.

    It is never inspected by the canonical-form machinery;
    indices carry it and direct sums concatenate it.
    """

    __slots__ = ('_qn',)

    def __init__(self, *vals):
        qn = []
        for v in vals:
            if isinstance(v, QNVal):
                qn.append(QNVal.make(v.val, v.mod) if v.mod != 0 else v)
            elif isinstance(v, tuple):
                qn.append(QNVal.make(*v))
            else:
                qn.append(QNVal.make(v, 1))
        if len(qn) > NQN:
            raise ValueError(f"QN supports at most {NQN} components.")
        qn.extend([QNVal()] * (NQN - len(qn)))
        self._qn = tuple(qn)

    def __getitem__(self, n) -> int:
        return self._qn[n].val

    def mod(self, n) -> int:
        return self._qn[n].mod

    def __bool__(self):
        return self._qn[0].mod != 0

    def __neg__(self) -> QN:
        return QN(*(-v for v in self._qn))

    def __add__(self, other) -> QN:
        if not other:
            return self
        if not self:
            return other
        out = []
        for a, b in zip(self._qn, other._qn):
            if a.mod != b.mod:
                raise ValueError("Adding QNs with mismatched mod factors.")
            out.append(QNVal.make(a.val + b.val, a.mod) if a.mod != 0 else a)
        return QN(*out)

    def __sub__(self, other) -> QN:
        return self + (-other)

    def __eq__(self, other):
        return isinstance(other, QN) and self._qn == other._qn

    def __hash__(self):
        return hash(self._qn)

    def __repr__(self):
        active = [v for v in self._qn if v.mod != 0]
        return "QN(" + ",".join(f"{v.val}" if v.mod == 1 else f"{{{v.val},{v.mod}}}" for v in active) + ")"


def spin(Sz) -> QN:
    """ Sz in units of spin 1/2. """
    return QN(Sz)


def boson(Nb) -> QN:
    """ Spinless hard-core boson. """
    return QN(Nb)


def fermion(Nf) -> QN:
    """ Spinless fermion. """
    return QN(QNVal(Nf, -1))


def clock(n, N) -> QN:
    """ Z_N clock degree of freedom. """
    return QN((n, N))
