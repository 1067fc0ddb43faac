# Copyright 2025 Hathor Labs
#
# Licensed under the Apache License, Version 2.0 (the "License");
# you may not use this file except in compliance with the License.
# You may obtain a copy of the License at
#
#    http://www.apache.org/licenses/LICENSE-2.0
#
# Unless required by applicable law or agreed to in writing, software
# distributed under the License is distributed on an "AS IS" BASIS,
# WITHOUT WARRANTIES OR CONDITIONS OF ANY KIND, either express or implied.
# See the License for the specific language governing permissions and
# limitations under the License.

import os
from copy import deepcopy
from pathlib import Path
from typing import Any, TypeVar, Union

import yaml
from pydantic import BaseModel

T = TypeVar('T', bound=BaseModel)

_EXTENDS_KEY = 'extends'


def dict_from_yaml(*, filepath: Union[Path, str]) -> dict[str, Any]:
    """Takes a filepath to a yaml file and returns a dictionary with its contents."""
    if not os.path.isfile(filepath):
        raise ValueError(f"'{filepath}' is not a file")

    with open(filepath, 'r') as file:
        contents = yaml.safe_load(file)

    if contents is None:
        return {}

    if not isinstance(contents, dict):
        raise ValueError(f"'{filepath}' cannot be parsed as a dictionary")

    return contents


def dict_from_extended_yaml(*, filepath: Union[Path, str]) -> dict[str, Any]:
    """
    Takes a filepath to a yaml file and returns a dictionary with its contents.

    The file can name another yaml file in its 'extends' key, relative to its own directory, the values of the file
    are then merged over the values of the extended file. The 'extends' key is not present in the returned dictionary.
    """
    extension_dict = dict_from_yaml(filepath=filepath)
    file_to_extend = extension_dict.pop(_EXTENDS_KEY, None)

    if not file_to_extend:
        return extension_dict

    filepath_to_extend = Path(filepath).parent / str(file_to_extend)
    try:
        dict_to_extend = dict_from_extended_yaml(filepath=filepath_to_extend)
    except RecursionError as e:
        raise ValueError('Cannot parse yaml with recursive extensions.') from e

    return deep_merge(dict_to_extend, extension_dict)


def deep_merge(first_dict: dict[str, Any], second_dict: dict[str, Any]) -> dict[str, Any]:
    """
    Recursively merges two dicts, returning a new one with the merged values. Keeps both input dicts intact.

    >>> deep_merge(dict(a=1, b=dict(c=2, d=3)), dict(b=dict(d=5), e=6)) == dict(a=1, b=dict(c=2, d=5), e=6)
    True
    """
    merged = deepcopy(first_dict)
    for key, value in second_dict.items():
        if isinstance(merged.get(key), dict) and isinstance(value, dict):
            merged[key] = deep_merge(merged[key], value)
        else:
            merged[key] = deepcopy(value)
    return merged


def load_yaml_settings(model: type[T], *, filepath: str) -> T:
    """
    Load a settings model (pydantic based) and a filepath to a yaml file and returns a validated instance.
    YAML settings may use the `extends` key to merge definition with another existing file.
    """
    return model.model_validate(dict_from_extended_yaml(filepath=filepath))
