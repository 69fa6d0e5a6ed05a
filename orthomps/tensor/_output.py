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
""" Methods outputing data and index information from orthomps.Tensor. """
from __future__ import annotations
from numbers import Number
from ._tests import OrthompsError

__all__ = ['common_index', 'unique_inds']


def __str__(a) -> str:
    return f"Tensor(inds={a.inds}, dtype={a.dtype})"


def __repr__(a) -> str:
    return a.__str__()


def is_complex(a) -> bool:
    """ Return ``True`` if tensor data are complex. """
    return a.config.backend.is_complex(a._data)


def get_shape(a) -> tuple[int]:
    """ Dimensions of consecutive legs. """
    return tuple(ind.dim for ind in a.inds)


def item(a) -> Number:
    """
    Return an element of rank-0 tensor as a python scalar.

    Raises error for tensors with any leg.
    """
    if a.ndim > 0:
        raise OrthompsError(f"Only rank-0 tensor can be converted to a number; got indices {a.inds}.")
    return a.config.backend.item(a._data)


def to_numpy(a, inds=None) -> 'numpy.array':
    r"""
    Copy of the tensor data with legs ordered as ``inds``.

    If ``inds`` is ``None``, keep the order of ``a.inds``.
    """
    if inds is not None:
        a = a.permute(*inds)
    return a.config.backend.to_numpy(a._data)


def index_position(a, ind) -> int:
    try:
        return a.inds.index(ind)
    except ValueError as e:
        raise OrthompsError(f"Tensor does not have index {ind}.") from e


def inds_of_kind(a, kind) -> tuple:
    """ Indices of a given kind, ``'Link'`` or ``'Site'``, in the order of legs. """
    return tuple(ind for ind in a.inds if ind.kind == kind)


def common_index(a, b, kind=None):
    r"""
    The first index shared by tensors ``a`` and ``b``, optionally restricted to a given ``kind``.

    Return ``None`` if there is no such index.
    """
    if a is None or b is None:
        return None
    for ind in a.inds:
        if ind in b.inds and (kind is None or ind.kind == kind):
            return ind
    return None


def unique_inds(a, b) -> tuple:
    """ Indices of ``a`` not shared with ``b``. """
    return tuple(ind for ind in a.inds if ind not in b.inds)
