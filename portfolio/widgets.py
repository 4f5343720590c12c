"""
Deferred loader for the Cal.com scheduling embed.

Each embed container loads on first visibility or first interaction. The
embed script is fetched at most once per loader however many containers
ask for it at the same time; every caller awaits the same in-flight task.
Initialization is recorded on a CalRuntime, which renders the calls as a
bootstrap snippet for the page.
"""

import asyncio
import inspect
import json
import logging
from dataclasses import dataclass
from enum import Enum
from typing import Callable, Dict, Iterable, List, Mapping, Optional, Tuple, Any

import requests

from .config import CAL_EMBED_URL, CAL_ORIGIN

logger = logging.getLogger(__name__)

TRIGGER_KEYS = ("Enter", " ")


class LoadState(Enum):
    NOT_LOADED = "not_loaded"
    LOADING = "loading"
    LOADED = "loaded"
    ERROR = "error"


@dataclass
class EmbedContainer:
    target_id: Optional[str]
    cal_link: Optional[str]
    namespace: str = "meet"
    layout: str = "month_view"
    state: LoadState = LoadState.NOT_LOADED

    @classmethod
    def from_attrs(cls, attrs: Mapping[str, str]) -> "EmbedContainer":
        """Build from the container's ``data-cal-*`` attributes"""
        return cls(
            target_id=attrs.get("data-cal-target") or None,
            cal_link=attrs.get("data-cal-link") or None,
            namespace=attrs.get("data-cal-namespace") or "meet",
            layout=attrs.get("data-cal-layout") or "month_view",
        )


class ScriptLoadError(RuntimeError):
    pass


def fetch_script(url: str, timeout: float = 10.0) -> str:
    resp = requests.get(url, timeout=timeout)
    resp.raise_for_status()
    return resp.text


class EmbedScriptLoader:
    """Fetches the embed script once and shares the result"""

    def __init__(self, url: str = CAL_EMBED_URL, fetch: Optional[Callable] = None):
        self.url = url
        self.fetch = fetch or fetch_script
        self.source: Optional[str] = None
        self.fetch_count = 0
        self._task: Optional[asyncio.Future] = None

    @property
    def loaded(self) -> bool:
        return self.source is not None

    async def ensure_script(self) -> str:
        if self.source is not None:
            return self.source
        if self._task is None:
            self._task = asyncio.ensure_future(self._load())
        task = self._task
        try:
            # A cancelled caller must not cancel the fetch the others share
            return await asyncio.shield(task)
        except asyncio.CancelledError:
            if task.cancelled():
                raise ScriptLoadError("Embed script fetch was cancelled") from None
            raise

    async def _load(self) -> str:
        self.fetch_count += 1
        try:
            if inspect.iscoroutinefunction(self.fetch):
                source = await self.fetch(self.url)
            else:
                loop = asyncio.get_running_loop()
                source = await loop.run_in_executor(None, self.fetch, self.url)
        except BaseException:
            # Forget the failed or cancelled attempt so a later trigger can retry
            self._task = None
            raise
        self.source = source
        return source


_shared_loader: Optional[EmbedScriptLoader] = None


def shared_script_loader() -> EmbedScriptLoader:
    """Process-wide loader used when a WidgetLoader is not given one"""
    global _shared_loader
    if _shared_loader is None:
        _shared_loader = EmbedScriptLoader()
    return _shared_loader


class CalRuntime:
    """Records Cal embed API calls and renders them as JavaScript"""

    def __init__(self, origin: str = CAL_ORIGIN):
        self.origin = origin
        self.calls: List[Tuple[str, str, Dict[str, Any]]] = []
        self._namespaces = set()

    def init(self, namespace: str):
        self.calls.append(("init", namespace, {"origin": self.origin}))
        self._namespaces.add(namespace)

    def _require(self, namespace: str):
        if namespace not in self._namespaces:
            raise RuntimeError(f"Cal namespace {namespace!r} used before init")

    def inline(self, namespace: str, selector: str, cal_link: str, layout: str):
        self._require(namespace)
        self.calls.append(("inline", namespace, {
            "elementOrSelector": selector,
            "config": {"layout": layout},
            "calLink": cal_link,
        }))

    def ui(self, namespace: str, layout: str):
        self._require(namespace)
        self.calls.append(("ui", namespace, {"hideEventTypeDetails": False, "layout": layout}))

    def to_script(self) -> str:
        lines = []
        for action, namespace, options in self.calls:
            ns, opts = json.dumps(namespace), json.dumps(options)
            if action == "init":
                lines.append(f"Cal(\"init\", {ns}, {opts});")
            else:
                lines.append(f"Cal.ns[{ns}](\"{action}\", {opts});")
        return "\n".join(lines)


class WidgetLoader:

    def __init__(
        self,
        containers: Iterable[EmbedContainer],
        script_loader: Optional[EmbedScriptLoader] = None,
        runtime: Optional[CalRuntime] = None,
        observe: bool = True,
    ):
        self.containers = list(containers)
        self.script_loader = script_loader or shared_script_loader()
        self.runtime = runtime or CalRuntime()
        self.observe = observe

    def get(self, target_id: str) -> EmbedContainer:
        for c in self.containers:
            if c.target_id == target_id:
                return c
        raise KeyError(target_id)

    async def start(self):
        """Without visibility observation every container loads right away"""
        if self.observe:
            return
        await asyncio.gather(*(self.load(c) for c in self.containers))

    async def on_visible(self, target_id: str):
        await self.load(self.get(target_id))

    async def on_interaction(self, target_id: str, key: Optional[str] = None):
        """Pointer press (``key=None``) or a key press on the container"""
        if key is not None and key not in TRIGGER_KEYS:
            return
        await self.load(self.get(target_id))

    async def load(self, container: EmbedContainer):
        if container.state in (LoadState.LOADING, LoadState.LOADED):
            return
        container.state = LoadState.LOADING

        try:
            await self.script_loader.ensure_script()
        except asyncio.CancelledError:
            # The trigger itself went away; leave the container loadable
            container.state = LoadState.NOT_LOADED
            raise
        except Exception as e:
            logger.warning("Cal.com embed script failed to load: %s", e)
            container.state = LoadState.ERROR
            return

        self._initialize(container)

    def _initialize(self, container: EmbedContainer):
        if not container.target_id or not container.cal_link:
            logger.warning("Cal.com embed container is missing a target or link: %r", container)
            container.state = LoadState.ERROR
            return

        ns = container.namespace
        try:
            self.runtime.init(ns)
            self.runtime.inline(ns, f"#{container.target_id}", container.cal_link, container.layout)
            self.runtime.ui(ns, container.layout)
        except Exception:
            logger.exception("Failed to initialize Cal.com embed for #%s", container.target_id)
            container.state = LoadState.ERROR
            return

        container.state = LoadState.LOADED
