from __future__ import annotations

from typing import Any, Dict, List, Optional, Sequence
from urllib.parse import quote

import httpx
import typer

from cli.config import CLIConfig


class ApiClient:
    """Thin HTTP client for the sensor registry API."""

    def __init__(
        self, config: CLIConfig, transport: Optional[httpx.BaseTransport] = None
    ) -> None:
        self._config = config
        self._client = httpx.Client(
            base_url=config.base_url, timeout=config.timeout, transport=transport
        )

    def close(self) -> None:
        self._client.close()

    def list_sensors(self) -> List[Dict[str, Any]]:
        return self._request("GET", "/sensors").json()

    def get_sensor(self, name: str) -> Dict[str, Any]:
        response = self._client.get(_sensor_path(name))
        if response.status_code == 404:
            raise typer.BadParameter(f"Sensor {name} was not found.")
        return self._checked(response).json()

    def create_sensor(
        self, name: str, tags: Sequence[str], x: float, y: float
    ) -> Dict[str, Any]:
        body = {"name": name, "tags": list(tags), "location": {"x": x, "y": y}}
        return self._request("POST", "/sensors", json=body).json()

    def update_sensor(
        self, name: str, tags: Sequence[str], x: float, y: float
    ) -> Dict[str, Any]:
        body = {"tags": list(tags), "location": {"x": x, "y": y}}
        return self._request("PATCH", _sensor_path(name), json=body).json()

    def delete_sensor(self, name: str) -> Dict[str, Any]:
        return self._request("DELETE", _sensor_path(name)).json()

    def nearest_sensor(self, x: float, y: float) -> Dict[str, Any]:
        return self._request("GET", "/nearest", params={"x": x, "y": y}).json()

    def _request(self, method: str, url: str, **kwargs: Any) -> httpx.Response:
        return self._checked(self._client.request(method, url, **kwargs))

    def _checked(self, response: httpx.Response) -> httpx.Response:
        try:
            response.raise_for_status()
        except httpx.HTTPStatusError as exc:
            self._handle_http_error(exc)
        return response

    @staticmethod
    def _handle_http_error(exc: httpx.HTTPStatusError) -> None:
        detail: Any = None
        try:
            data = exc.response.json()
            detail = data.get("detail")
        except Exception:  # noqa: BLE001 - best effort parsing
            detail = exc.response.text.strip()
        message = (
            f"Request failed with status {exc.response.status_code}: {detail or 'no detail provided.'}"
        )
        typer.secho(message, fg=typer.colors.RED, err=True)
        raise typer.Exit(code=1)


def _sensor_path(name: str) -> str:
    return f"/sensors/{quote(name, safe='')}"
