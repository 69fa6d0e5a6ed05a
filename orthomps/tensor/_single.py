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
""" Operations on a single orthomps.Tensor. """
from __future__ import annotations
from ._auxliary import _clear_inds
from ._tests import OrthompsError

__all__ = ['conj', 'copy', 'prime', 'noprime', 'permute', 'replace_inds']


def copy(a) -> orthomps.Tensor:
    r"""
    Return a copy of the tensor. Data of the resulting tensor is independent
    from the original.
    """
    return a._replace(data=a.config.backend.copy(a._data))


def conj(a) -> orthomps.Tensor:
    r"""
    Return complex conjugate of the tensor, keeping its indices.

    Dense tensors carry no arrows, so this is the ``dag`` operation of the tensor network.
    """
    return a._replace(data=a.config.backend.conj(a._data))


def _selected(a, inds, kind):
    inds = _clear_inds(inds)
    if any(ind not in a.inds for ind in inds):
        raise OrthompsError(f'Tensor does not have some of indices {inds}.')
    if not inds:
        inds = a.inds if kind is None else tuple(ind for ind in a.inds if ind.kind == kind)
    return set(inds)


def prime(a, inds=None, kind=None, n=1) -> orthomps.Tensor:
    r"""
    Raise prime level of selected indices.

    Parameters
    ----------
    inds: orthomps.Index | Sequence[orthomps.Index] | None
        Indices to prime. If ``None``, prime all indices (of a given ``kind`` if provided).

    kind: str | None
        ``'Link'`` or ``'Site'``; used only when ``inds`` is ``None``.

    n: int
        Increment of the prime level. The default is 1.
    """
    sel = _selected(a, inds, kind)
    new_inds = tuple(ind.prime(n) if ind in sel else ind for ind in a.inds)
    return a._replace(inds=new_inds)


def noprime(a, inds=None, kind=None) -> orthomps.Tensor:
    r"""
    Reset prime level of selected indices to 0.

    See :meth:`prime` for the meaning of ``inds`` and ``kind``.
    """
    sel = _selected(a, inds, kind)
    new_inds = tuple(ind.noprime() if ind in sel else ind for ind in a.inds)
    return a._replace(inds=new_inds)


def replace_inds(a, old, new) -> orthomps.Tensor:
    r"""
    Relabel indices ``old`` by ``new``; dimensions have to match.
    """
    old, new = _clear_inds(old), _clear_inds(new)
    if len(old) != len(new):
        raise OrthompsError('replace_inds requires the same number of old and new indices.')
    mapping = dict(zip(old, new))
    if any(ind not in a.inds for ind in old):
        raise OrthompsError(f'Tensor does not have some of indices {old}.')
    return a._replace(inds=tuple(mapping.get(ind, ind) for ind in a.inds))


def permute(a, *inds) -> orthomps.Tensor:
    r"""
    Return tensor with legs ordered as ``inds``.
    """
    if len(inds) == 1 and not hasattr(inds[0], 'dim'):
        inds = tuple(inds[0])
    if set(inds) != set(a.inds) or len(inds) != a.ndim:
        raise OrthompsError(f'permute: {inds} is not a permutation of {a.inds}.')
    order = tuple(a.inds.index(ind) for ind in inds)
    return a._replace(inds=inds, data=a.config.backend.transpose(a._data, order))
