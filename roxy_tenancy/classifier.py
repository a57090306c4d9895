"""
Method- and path-aware classification of Docker API requests.

Classification runs an ordered list of rules over the request; the first
rule that yields a value wins. The order is the precedence:

  1. ``family_delete``   DELETE on container > network > image > volume
  2. ``container_item``  ``container<subaction>`` or ``containers<id>``
  3. ``image_item``      ``image<subaction>`` or ``images<id>``
  4. ``networks_list``   path ends in ``/networks``
  5. ``network_item``    ``networkcreate`` / ``networkinspect`` / ``network<id>``
  6. ``volumes_list``    ``/volumes``, ``/volumes/`` or a ``/volumes?`` query
  7. ``volume_item``     ``volumecreate`` / ``volumeinspect``
  8. ``generic``         ``exec<action>`` or the trailing segment verbatim

Rules 2-8 only apply to GET and POST. Anything left over is UNSUPPORTED.
Collection checks (4, 6) sit before the matching item rules because the
list and item endpoints share a path prefix.
"""
import logging
import re
from typing import Callable, Mapping, NamedTuple, Optional, Sequence, Tuple

from roxy_tenancy.commands import COMMAND_TABLE, Command, lookup
from roxy_tenancy.patterns import PathMatches, ResourceType
from roxy_tenancy.request import InboundRequest

logger = logging.getLogger(__name__)

READ_WRITE_METHODS = frozenset({"GET", "POST"})
EXEC_ACTIONS = frozenset({"start", "resize", "json"})

RuleFn = Callable[[InboundRequest, PathMatches], Optional[str]]


class Rule(NamedTuple):
    name: str
    apply: RuleFn


def _family_delete(request: InboundRequest, matches: PathMatches) -> Optional[str]:
    if request.method != "DELETE":
        return None
    for family in (ResourceType.CONTAINER, ResourceType.NETWORK, ResourceType.IMAGE, ResourceType.VOLUME):
        if getattr(matches, family.value) is not None:
            return f"{family.value}delete"
    return None


def _read_write(fn: RuleFn) -> RuleFn:
    def rule(request: InboundRequest, matches: PathMatches) -> Optional[str]:
        if request.method not in READ_WRITE_METHODS:
            return None
        return fn(request, matches)
    rule.__name__ = fn.__name__
    rule.__doc__ = fn.__doc__
    return rule


@_read_write
def _container_item(request: InboundRequest, matches: PathMatches) -> Optional[str]:
    m = matches.container
    if m is None:
        return None
    if m.has_subaction:
        return "container" + m.subaction
    if m.has_bare:
        # Plural on the bare form: /containers/json -> containersjson
        return "containers" + m.bare
    return None


@_read_write
def _image_item(request: InboundRequest, matches: PathMatches) -> Optional[str]:
    m = matches.image
    if m is None:
        return None
    if m.has_subaction:
        return "image" + m.subaction
    if m.has_bare:
        return "images" + m.bare
    return None


@_read_write
def _networks_list(request: InboundRequest, matches: PathMatches) -> Optional[str]:
    if request.path.endswith("/networks"):
        return Command.NETWORKS_LIST.value
    return None


@_read_write
def _network_item(request: InboundRequest, matches: PathMatches) -> Optional[str]:
    m = matches.network
    if m is None:
        return None
    if m.has_subaction:
        if m.subaction == "create":
            return Command.NETWORK_CREATE.value
        return Command.NETWORK_INSPECT.value
    return "network" + m.bare


@_read_write
def _volumes_list(request: InboundRequest, matches: PathMatches) -> Optional[str]:
    path = request.path
    if path.endswith("/volumes") or path.endswith("/volumes/") or "/volumes?" in request.request_uri:
        return Command.VOLUMES_LIST.value
    return None


@_read_write
def _volume_item(request: InboundRequest, matches: PathMatches) -> Optional[str]:
    m = matches.volume
    if m is None:
        return None
    action = m.subaction or m.bare
    if action == "create":
        return Command.VOLUME_CREATE.value
    return Command.VOLUME_INSPECT.value


@_read_write
def _generic(request: InboundRequest, matches: PathMatches) -> Optional[str]:
    m = matches.generic
    if m is None:
        return None
    if m.tail in EXEC_ACTIONS:
        return "exec" + m.tail
    return m.tail


RULES: Tuple[Rule, ...] = (
    Rule("family_delete", _family_delete),
    Rule("container_item", _container_item),
    Rule("image_item", _image_item),
    Rule("networks_list", _networks_list),
    Rule("network_item", _network_item),
    Rule("volumes_list", _volumes_list),
    Rule("volume_item", _volume_item),
    Rule("generic", _generic),
)


class Classification(NamedTuple):
    command: Command
    raw: str
    rule: Optional[str]


class CommandClassifier:
    """
    Turns (method, path) into a canonical Command.

    The lookup table and rule list are fixed at construction and never
    mutated, so a single instance can be shared across threads.
    """

    def __init__(
        self,
        table: Mapping[str, Command] = COMMAND_TABLE,
        rules: Sequence[Rule] = RULES,
    ):
        self._table = table
        self._rules = tuple(rules)

    @property
    def rules(self) -> Tuple[Rule, ...]:
        return self._rules

    def explain(self, request: InboundRequest) -> Classification:
        """Classify and report which rule fired, if any."""
        matches = PathMatches.of(request.path)
        logger.debug(f"{request.method} {request.path} matched {matches}")
        for rule in self._rules:
            raw = rule.apply(request, matches)
            if raw is not None:
                command = lookup(raw, self._table)
                logger.debug(f"Rule {rule.name} produced {raw!r} -> {command.value}")
                return Classification(command, raw, rule.name)
        logger.debug(f"No rule matched {request.method} {request.path}")
        return Classification(Command.UNSUPPORTED, Command.UNSUPPORTED.value, None)

    def classify(self, request: InboundRequest) -> Command:
        return self.explain(request).command

    def classify_raw(self, request: InboundRequest) -> str:
        """The rule output before table lookup, e.g. ``networkabc`` for a bare network id."""
        return self.explain(request).raw


DEFAULT_CLASSIFIER = CommandClassifier()


def parse_command(request: InboundRequest) -> Command:
    return DEFAULT_CLASSIFIER.classify(request)


def classify(method: str, path: str, request_uri: str = "") -> Command:
    """Shortcut for callers holding the method and path as plain strings."""
    request = InboundRequest(method=method.upper(), path=path, request_uri=request_uri or path)
    return DEFAULT_CLASSIFIER.classify(request)


class ResourceReference(NamedTuple):
    resource_type: ResourceType
    resource_id: str


# Bare segments that address a collection endpoint rather than one resource.
COLLECTION_SEGMENTS = frozenset({"json", "create", "search", "prune", "load", "get"})

_EXEC_PATH = re.compile(r"/exec/([^/]+)/(\w+)$")


def resource_reference(request: InboundRequest) -> Optional[ResourceReference]:
    """
    The single resource a request addresses, or None for collection and
    global endpoints.
    """
    matches = PathMatches.of(request.path)
    for family in (ResourceType.CONTAINER, ResourceType.NETWORK, ResourceType.IMAGE, ResourceType.VOLUME):
        m = getattr(matches, family.value)
        if m is None:
            continue
        if m.has_subaction:
            ident = m.item
        elif m.has_bare:
            ident = request.path.rsplit("/", 1)[-1]
        else:
            return None
        if m.has_bare and ident in COLLECTION_SEGMENTS:
            return None
        return ResourceReference(family, ident)

    m = _EXEC_PATH.search(request.path)
    if m is not None:
        return ResourceReference(ResourceType.EXEC, m.group(1))
    return None
