from enum import Enum
from types import MappingProxyType
from typing import Mapping


class Command(str, Enum):
    """Canonical identifier of a supported Docker API action."""
    # Global
    PING = "ping"
    EVENTS = "events"
    INFO = "info"
    VERSION = "version"

    # Containers
    PS = "containersps"
    JSON = "containersjson"
    CONTAINER_ARCHIVE = "containerarchive"
    CONTAINER_EXPORT = "containerexport"
    CONTAINER_IMPORT = "containerimport"
    CONTAINER_CHANGES = "containerchanges"
    CONTAINER_JSON = "containerjson"
    CONTAINER_TOP = "containertop"
    CONTAINER_LOGS = "containerlogs"
    CONTAINER_STATS = "containerstats"
    CONTAINER_CREATE = "containerscreate"
    CONTAINER_KILL = "containerkill"
    CONTAINER_PAUSE = "containerpause"
    CONTAINER_UNPAUSE = "containerunpause"
    CONTAINER_RENAME = "containerrename"
    CONTAINER_RESTART = "containerrestart"
    CONTAINER_START = "containerstart"
    CONTAINER_STOP = "containerstop"
    CONTAINER_UPDATE = "containerupdate"
    CONTAINER_WAIT = "containerwait"
    CONTAINER_RESIZE = "containerresize"
    CONTAINER_ATTACH = "containerattach"
    CONTAINER_COPY = "containercopy"
    CONTAINER_EXEC = "containerexec"
    CONTAINER_DELETE = "containerdelete"

    # Exec sessions
    EXEC_START = "execstart"
    EXEC_RESIZE = "execresize"
    EXEC_JSON = "execjson"

    # Networks
    NETWORKS_LIST = "networkslist"
    NETWORK_INSPECT = "networkinspect"
    NETWORK_CONNECT = "networkconnect"
    NETWORK_DISCONNECT = "networkdisconnect"
    NETWORK_CREATE = "networkcreate"
    NETWORK_DELETE = "networkdelete"

    # Volumes
    VOLUMES_LIST = "volumeslist"
    VOLUME_INSPECT = "volumeinspect"
    VOLUME_CREATE = "volumecreate"
    VOLUME_DELETE = "volumedelete"

    # Images
    IMAGES_JSON = "imagesjson"
    IMAGE_PULL = "imagescreate"
    IMAGE_SEARCH = "imagessearch"
    IMAGE_JSON = "imagejson"
    IMAGE_HISTORY = "imagehistory"
    IMAGE_DELETE = "imagedelete"

    UNSUPPORTED = "unsupported"

    @property
    def supported(self) -> bool:
        return self is not Command.UNSUPPORTED


# Raw path segments that name a command without being its canonical value.
_ALIASES = {
    "_ping": Command.PING,
}


def build_command_table() -> Mapping[str, Command]:
    """
    Build the raw-string to Command lookup table.

    The result is read-only; build it once at startup and share it between
    threads.
    """
    table = {command.value: command for command in Command if command.supported}
    table.update(_ALIASES)
    return MappingProxyType(table)


COMMAND_TABLE: Mapping[str, Command] = build_command_table()


def lookup(raw: str, table: Mapping[str, Command] = COMMAND_TABLE) -> Command:
    """Resolve a raw classifier string, falling back to UNSUPPORTED."""
    return table.get(raw, Command.UNSUPPORTED)
