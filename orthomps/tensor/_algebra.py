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
""" Linear operations on orthomps.Tensor. """
from __future__ import annotations
from numbers import Number
from ._contractions import contract
from ._tests import OrthompsError, _test_can_be_combined

__all__ = ['add']


def __add__(a, b) -> orthomps.Tensor:
    """
    Add two tensors with the same set of indices, use: :math:`a + b`.

    The order of legs follows ``a``.
    """
    return add(a, b)


def __sub__(a, b) -> orthomps.Tensor:
    """
    Subtract two tensors with the same set of indices, use: :math:`a - b`.
    """
    return add(a, b, amplitudes=(1, -1))


def __mul__(a, b) -> orthomps.Tensor:
    """
    Multiply tensor by a number, or contract two tensors over their common indices, use: ``a * b``.
    """
    if isinstance(b, Number):
        return a._replace(data=b * a._data)
    return contract(a, b)


def __rmul__(a, number) -> orthomps.Tensor:
    """ Multiply tensor by a number, use: ``number * a``. """
    if not isinstance(number, Number):
        return NotImplemented
    return a._replace(data=number * a._data)


def __truediv__(a, number) -> orthomps.Tensor:
    """ Divide tensor by a number, use: ``a / number``. """
    return a._replace(data=a._data / number)


def __neg__(a) -> orthomps.Tensor:
    """ Tensor with opposite sign, use: ``-a``. """
    return a._replace(data=-a._data)


def add(*tensors, amplitudes=None) -> orthomps.Tensor:
    r"""
    Linear combination of tensors with the same set of indices,
    i.e., :math:`\sum_j \textrm{amplitudes[j]}{\times}\textrm{tensors[j]}`.

    Parameters
    ----------
    tensors: Sequence[orthomps.Tensor]

    amplitudes: Sequence[scalar]
        If ``None``, all amplitudes are set to :math:`1`.
    """
    if amplitudes is None:
        amplitudes = (1,) * len(tensors)
    if len(tensors) != len(amplitudes):
        raise OrthompsError('Number of tensors to add must be equal to the number of coefficients in amplitudes.')
    a = tensors[0]
    data = amplitudes[0] * a._data
    for b, amp in zip(tensors[1:], amplitudes[1:]):
        _test_can_be_combined(a, b)
        if set(b.inds) != set(a.inds):
            raise OrthompsError(f'Tensors to add have different indices: {a.inds} and {b.inds}.')
        data = data + amp * b.permute(*a.inds)._data
    return a._replace(data=data)
