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
""" Testing and controls. """

__all__ = ['are_independent', 'OrthompsError']


class OrthompsError(Exception):
    """Errors raised by orthomps."""


def _test_can_be_combined(a, b):
    """Check if config's of two tensors allow for performing operations mixing them. """
    if type(a) is not type(b):
        raise OrthompsError('Operation requires two orthomps.Tensor-s')
    if a.config.backend.BACKEND_ID != b.config.backend.BACKEND_ID:
        raise OrthompsError('Two tensors have different backends.')


def _test_inds(inds, shape):
    """ Indices should be distinct and match the shape of the data. """
    if len(set(inds)) != len(inds):
        raise OrthompsError(f'Repeated index in {inds}.')
    if len(inds) != len(shape):
        raise OrthompsError(f'Number of indices {len(inds)} does not match tensor rank {len(shape)}.')
    if any(ind.dim != d for ind, d in zip(inds, shape)):
        raise OrthompsError(f'Index dimensions {tuple(ind.dim for ind in inds)} do not match data shape {tuple(shape)}.')


def are_independent(a, b):
    """
    Test if all elements of two orthomps tensors are independent objects in memory.
    """
    return a.config.backend.is_independent(a._data, b._data)
