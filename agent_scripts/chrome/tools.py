"""Typed wrappers for the chrome-devtools-mcp tools.

Method names follow the server's tool names. Parameters are passed through in
the server's camelCase spelling; arguments left as None are omitted.
"""

from __future__ import annotations

from typing import TYPE_CHECKING, Any, Literal, Sequence

from agent_scripts.results import CommandResult

if TYPE_CHECKING:
    from agent_scripts.chrome.models import NavigationType, NetworkCondition, ScreenshotFormat
    from agent_scripts.chrome.session import ChromeSession


class ChromeTools:
    def __init__(self, session: ChromeSession) -> None:
        self._session = session

    async def _call(self, tool: str, **params: Any) -> CommandResult:
        return await self._session.call(tool, params)

    # --- input ---

    async def click(
        self, uid: str, dbl_click: bool | None = None, include_snapshot: bool | None = None
    ) -> CommandResult:
        return await self._call(
            "click", uid=uid, dblClick=dbl_click, includeSnapshot=include_snapshot
        )

    async def hover(self, uid: str) -> CommandResult:
        return await self._call("hover", uid=uid)

    async def fill(self, uid: str, value: str) -> CommandResult:
        return await self._call("fill", uid=uid, value=value)

    async def fill_form(self, elements: Sequence[tuple[str, str]]) -> CommandResult:
        """Fill several fields at once; ``elements`` is ``(uid, value)`` pairs."""
        return await self._call(
            "fill_form", elements=[{"uid": uid, "value": value} for uid, value in elements]
        )

    async def drag(self, from_uid: str, to_uid: str) -> CommandResult:
        return await self._call("drag", from_uid=from_uid, to_uid=to_uid)

    async def press_key(self, key: str) -> CommandResult:
        """Press a key or combination such as ``"Enter"`` or ``"Control+A"``."""
        return await self._call("press_key", key=key)

    async def upload_file(self, uid: str, file_path: str) -> CommandResult:
        return await self._call("upload_file", uid=uid, filePath=file_path)

    async def handle_dialog(
        self, action: Literal["accept", "dismiss"], prompt_text: str | None = None
    ) -> CommandResult:
        return await self._call("handle_dialog", action=action, promptText=prompt_text)

    # --- navigation ---

    async def list_pages(self) -> CommandResult:
        return await self._call("list_pages")

    async def select_page(self, page_id: int, bring_to_front: bool | None = None) -> CommandResult:
        return await self._call("select_page", pageId=page_id, bringToFront=bring_to_front)

    async def new_page(self, url: str, timeout: int | None = None) -> CommandResult:
        return await self._call("new_page", url=url, timeout=timeout)

    async def navigate_page(
        self,
        url: str | None = None,
        type: NavigationType | None = None,
        ignore_cache: bool | None = None,
        handle_before_unload: Literal["accept", "decline"] | None = None,
        timeout: int | None = None,
    ) -> CommandResult:
        if type is None and url is not None:
            type = "url"
        return await self._call(
            "navigate_page",
            type=type,
            url=url,
            ignoreCache=ignore_cache,
            handleBeforeUnload=handle_before_unload,
            timeout=timeout,
        )

    async def close_page(self, page_id: int) -> CommandResult:
        return await self._call("close_page", pageId=page_id)

    async def wait_for(self, text: str, timeout: int | None = None) -> CommandResult:
        return await self._call("wait_for", text=text, timeout=timeout)

    # --- emulation ---

    async def emulate(
        self,
        network_conditions: NetworkCondition | None = None,
        cpu_throttling_rate: float | None = None,
        geolocation: dict[str, float] | None = None,
        user_agent: str | None = None,
        viewport: dict[str, Any] | None = None,
    ) -> CommandResult:
        return await self._call(
            "emulate",
            networkConditions=network_conditions,
            cpuThrottlingRate=cpu_throttling_rate,
            geolocation=geolocation,
            userAgent=user_agent,
            viewport=viewport,
        )

    async def resize_page(self, width: int, height: int) -> CommandResult:
        return await self._call("resize_page", width=width, height=height)

    # --- performance ---

    async def performance_start_trace(
        self, reload: bool = True, auto_stop: bool = True, file_path: str | None = None
    ) -> CommandResult:
        return await self._call(
            "performance_start_trace", reload=reload, autoStop=auto_stop, filePath=file_path
        )

    async def performance_stop_trace(self, file_path: str | None = None) -> CommandResult:
        return await self._call("performance_stop_trace", filePath=file_path)

    async def performance_analyze_insight(
        self, insight_set_id: str, insight_name: str
    ) -> CommandResult:
        return await self._call(
            "performance_analyze_insight", insightSetId=insight_set_id, insightName=insight_name
        )

    # --- network ---

    async def list_network_requests(
        self,
        page_size: int | None = None,
        page_idx: int | None = None,
        resource_types: Sequence[str] | None = None,
        include_preserved_requests: bool | None = None,
    ) -> CommandResult:
        return await self._call(
            "list_network_requests",
            pageSize=page_size,
            pageIdx=page_idx,
            resourceTypes=list(resource_types) if resource_types else None,
            includePreservedRequests=include_preserved_requests,
        )

    async def get_network_request(
        self,
        reqid: int | None = None,
        request_file_path: str | None = None,
        response_file_path: str | None = None,
    ) -> CommandResult:
        return await self._call(
            "get_network_request",
            reqid=reqid,
            requestFilePath=request_file_path,
            responseFilePath=response_file_path,
        )

    # --- debugging ---

    async def take_snapshot(
        self, verbose: bool | None = None, file_path: str | None = None
    ) -> CommandResult:
        """Text snapshot of the accessibility tree; element uids come from here."""
        return await self._call("take_snapshot", verbose=verbose, filePath=file_path)

    async def take_screenshot(
        self,
        format: ScreenshotFormat | None = None,
        quality: int | None = None,
        uid: str | None = None,
        full_page: bool | None = None,
        file_path: str | None = None,
    ) -> CommandResult:
        return await self._call(
            "take_screenshot",
            format=format,
            quality=quality,
            uid=uid,
            fullPage=full_page,
            filePath=file_path,
        )

    async def evaluate_script(
        self, function: str, args: Sequence[str] | None = None
    ) -> CommandResult:
        """Run a JavaScript function declaration; ``args`` are element uids passed to it."""
        return await self._call(
            "evaluate_script",
            function=function,
            args=[{"uid": uid} for uid in args] if args else None,
        )

    async def list_console_messages(
        self,
        page_size: int | None = None,
        page_idx: int | None = None,
        types: Sequence[str] | None = None,
        include_preserved_messages: bool | None = None,
    ) -> CommandResult:
        return await self._call(
            "list_console_messages",
            pageSize=page_size,
            pageIdx=page_idx,
            types=list(types) if types else None,
            includePreservedMessages=include_preserved_messages,
        )

    async def get_console_message(self, msgid: int) -> CommandResult:
        return await self._call("get_console_message", msgid=msgid)
