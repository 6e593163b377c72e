"""MCP stdio-based JSON-RPC server for the CMS tools.

MCP (Model Context Protocol) 서버 구현
- stdio(표준 입출력) 기반 JSON-RPC 2.0 통신
- LLM 클라이언트가 CMS 페이지 생성/조회/번역/수정 툴을 호출하는 브릿지

지원 메서드:
- initialize: 서버 초기화 및 capability 협상
- tools/list: 등록된 CMS 툴 목록
- tools/call: 툴 실행 및 결과 반환

각 메시지는 개행 문자로 구분된 JSON 한 줄입니다.

사용 예시:
    $ python -m src.mcp.server
    (stdin) {"jsonrpc": "2.0", "id": 1, "method": "tools/list"}
    (stdout) {"jsonrpc": "2.0", "id": 1, "result": {"tools": [...]}}
"""
import asyncio
import json
import sys
import logging
from typing import Dict, Any

from src.mcp.tools import TOOLS_REGISTRY

# stdout은 JSON-RPC 전용이므로 로그는 stderr로 보냄
logging.basicConfig(level=logging.INFO, stream=sys.stderr)
logger = logging.getLogger(__name__)

SERVER_NAME = "cms-tools-bridge"
SERVER_VERSION = "1.0.0"
PROTOCOL_VERSION = "1.0"

INVALID_REQUEST = -32600
METHOD_NOT_FOUND = -32601
INVALID_PARAMS = -32602
INTERNAL_ERROR = -32603


def _error(request_id: Any, code: int, message: str) -> Dict[str, Any]:
    return {
        "jsonrpc": "2.0",
        "id": request_id,
        "error": {"code": code, "message": message},
    }


def _result(request_id: Any, result: Dict[str, Any]) -> Dict[str, Any]:
    return {"jsonrpc": "2.0", "id": request_id, "result": result}


class MCPServer:
    """Stdio-based MCP JSON-RPC server.

    Tool failures that the tools report themselves (``success: False``) are
    normal results; only unexpected exceptions become JSON-RPC errors.
    """

    def __init__(self, registry: Dict[str, Any] = None):
        self.registry = registry if registry is not None else TOOLS_REGISTRY
        self.initialized = False

    async def handle_request(self, request: Dict[str, Any]) -> Dict[str, Any]:
        """JSON-RPC 요청을 처리하고 응답을 반환합니다.

        JSON-RPC 에러 코드:
        - -32600: Invalid Request (요청이 JSON 객체가 아님)
        - -32601: Method not found
        - -32602: Invalid params (툴을 찾을 수 없음)
        - -32603: Internal error
        """
        if not isinstance(request, dict):
            logger.error("Invalid JSON-RPC request: %r", request)
            return _error(None, INVALID_REQUEST, "Invalid Request")

        method = request.get("method")
        params = request.get("params") or {}
        request_id = request.get("id")

        try:
            if method == "initialize":
                return await self.initialize(request_id, params)
            elif method == "tools/list":
                return await self.list_tools(request_id)
            elif method == "tools/call":
                return await self.call_tool(request_id, params)
            else:
                return _error(request_id, METHOD_NOT_FOUND, f"Method not found: {method}")
        except Exception as e:
            logger.exception("Error handling request")
            return _error(request_id, INTERNAL_ERROR, f"Internal error: {str(e)}")

    async def initialize(self, request_id: Any, params: Dict[str, Any]) -> Dict[str, Any]:
        """Capability negotiation. Called once after the client connects."""
        self.initialized = True
        client_info = params.get("clientInfo") or {}
        logger.info("MCP server initialized (client: %s)", client_info.get("name", "unknown"))

        return _result(request_id, {
            "protocolVersion": PROTOCOL_VERSION,
            "serverInfo": {
                "name": SERVER_NAME,
                "version": SERVER_VERSION
            },
            "capabilities": {
                "tools": {}
            }
        })

    async def list_tools(self, request_id: Any) -> Dict[str, Any]:
        tools = [module.TOOL for module in self.registry.values()]
        return _result(request_id, {"tools": tools})

    async def call_tool(self, request_id: Any, params: Dict[str, Any]) -> Dict[str, Any]:
        """Run a registered tool and wrap its result as MCP text content.

        Args:
            request_id: JSON-RPC 요청 ID
            params: {"name": 툴 이름, "arguments": 툴 인자}
        """
        tool_name = params.get("name")
        arguments = params.get("arguments") or {}

        if tool_name not in self.registry:
            return _error(request_id, INVALID_PARAMS, f"Tool not found: {tool_name}")

        try:
            result = await self.registry[tool_name].run(arguments)
        except Exception as e:
            logger.exception("Error executing tool %s", tool_name)
            return _error(request_id, INTERNAL_ERROR, f"Tool execution error: {str(e)}")

        return _result(request_id, {
            "content": [
                {
                    "type": "text",
                    "text": json.dumps(result, indent=2, ensure_ascii=False)
                }
            ],
            "isError": result.get("success") is False,
        })

    async def run(self):
        """Read requests from stdin and write responses to stdout until EOF."""
        logger.info("Starting MCP server on stdio")
        loop = asyncio.get_running_loop()

        while True:
            try:
                # stdin 읽기는 블로킹이므로 executor 사용
                line = await loop.run_in_executor(None, sys.stdin.readline)

                if not line:
                    break
                if not line.strip():
                    continue

                request = json.loads(line)
                response = await self.handle_request(request)

                sys.stdout.write(json.dumps(response, ensure_ascii=False) + "\n")
                sys.stdout.flush()

            except json.JSONDecodeError as e:
                logger.error(f"JSON decode error: {e}")
            except KeyboardInterrupt:
                logger.info("Server interrupted")
                break


async def main():
    server = MCPServer()
    await server.run()


if __name__ == "__main__":
    asyncio.run(main())
