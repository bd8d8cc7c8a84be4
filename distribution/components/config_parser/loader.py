import re
from typing import IO, Union

import yaml

INT_TAG: str = "tag:yaml.org,2002:int"


class ConfigLoader(yaml.SafeLoader):
    """
    YAML loader for configuration files. Only decimal literals resolve to integers,
    so unquoted `0x...` addresses stay strings instead of being read as hex numbers.
    """


ConfigLoader.yaml_implicit_resolvers = {
    first: [(tag, regexp) for tag, regexp in resolvers if tag != INT_TAG]
    for first, resolvers in yaml.SafeLoader.yaml_implicit_resolvers.items()
}
ConfigLoader.add_implicit_resolver(
    INT_TAG, re.compile(r"^(?:[-+]?(?:0|[1-9][0-9_]*))$"), list("-+0123456789")
)


def load_config(stream: Union[str, IO]) -> dict:
    return yaml.load(stream, Loader=ConfigLoader)
