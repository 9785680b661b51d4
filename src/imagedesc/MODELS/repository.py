"""
Models for browsing an image as a tagged repository made of layers.
"""
from typing import List
from pydantic import BaseModel


class LayerFile(BaseModel):
    """
    A file or directory inside a layer.
    """
    name: str
    path: str
    size: int = 0
    is_dir: bool = False
    children: List["LayerFile"] = []


class Layer(BaseModel):
    """
    One filesystem changeset of a repository, with the command that produced it.
    """
    root: str
    size: int = 0
    command: str = ""
    files: List[LayerFile] = []


class Repo(BaseModel):
    """
    A tagged image, its provenance and its layers from bottom to top.
    """
    tag: str = ""
    docker_version: str = ""
    created: str = ""
    layers: List[Layer] = []
