from dataclasses import dataclass, replace
from os import PathLike
from typing import Union
import structlog

log = structlog.get_logger(__name__)

PATH_SEPARATOR = "/"
DEFAULT_ENCODING = "utf-8"

def normalize_base_dir(directory: Union[str, "PathLike[str]", None]) -> str:
    # empty stays empty, anything else ends with exactly the separator it was given or "/".
    if directory is None:
        return ""
    dir_str = str(directory)
    if dir_str == "" or dir_str.endswith(PATH_SEPARATOR):
        return dir_str
    return dir_str + PATH_SEPARATOR

@dataclass
class EngineConfig:
    # holds the mutable settings of one TemplateEngine.
    base_dir: str = ""
    cache_enabled: bool = False
    encoding: str = DEFAULT_ENCODING

    def __post_init__(self):
        self.base_dir = normalize_base_dir(self.base_dir)

    def snapshot(self) -> "EngineConfig":
        # copy taken at the start of a composition call.
        return replace(self)

    def resolve(self, name: str) -> str:
        # templates are addressed by plain concatenation, never by path joining.
        return self.base_dir + name
