"""HTTP client for the study planner REST API, used by the Streamlit pages."""

from datetime import date
from typing import Any, Dict, List, Optional

import httpx


class ApiError(Exception):
    def __init__(self, status_code: int, message: str):
        super().__init__(f"{status_code}: {message}")
        self.status_code = status_code
        self.message = message


class StudyPlannerClient:
    """
    Thin wrapper over the JSON API.

    Pass ``client`` to reuse an existing ``httpx.Client`` (for example a
    FastAPI ``TestClient``); otherwise one is created for ``base_url``.
    """

    def __init__(
        self,
        base_url: str = "http://localhost:8000",
        token: Optional[str] = None,
        client: Optional[httpx.Client] = None,
        timeout: float = 180.0
    ):
        self.token = token
        # LLM calls are slow; the default timeout covers plan generation
        self.client = client or httpx.Client(base_url=base_url, timeout=timeout)

    # --- auth -----------------------------------------------------------

    def register(self, email: str, password: str, name: Optional[str] = None) -> Dict[str, Any]:
        return self._request("POST", "/api/auth/register", json={"email": email, "password": password, "name": name})["user"]

    def login(self, email: str, password: str) -> Dict[str, Any]:
        data = self._request("POST", "/api/auth/login", json={"email": email, "password": password})
        self.token = data["token"]
        return data["user"]

    def logout(self) -> None:
        self._request("POST", "/api/auth/logout")
        self.token = None

    def current_user(self) -> Dict[str, Any]:
        return self._request("GET", "/api/auth/session")["user"]

    # --- study blocks ---------------------------------------------------

    def list_study_blocks(self) -> List[Dict[str, Any]]:
        return self._request("GET", "/api/study-blocks")["studyBlocks"]

    def create_study_block(
        self,
        title: str,
        test_date: date,
        hours_per_day: float,
        selected_days: List[str],
        content: str
    ) -> Dict[str, Any]:
        payload = {
            "title": title,
            "testDate": test_date.isoformat(),
            "hoursPerDay": hours_per_day,
            "selectedDays": selected_days,
            "content": content,
        }
        return self._request("POST", "/api/study-blocks", json=payload)["studyBlock"]

    def get_study_block(self, block_id: int) -> Dict[str, Any]:
        return self._request("GET", f"/api/study-blocks/{block_id}")["studyBlock"]

    def generate_plan(self, block_id: int, idempotency_key: Optional[str] = None) -> List[Dict[str, Any]]:
        headers = {"Idempotency-Key": idempotency_key} if idempotency_key else None
        return self._request("POST", f"/api/study-blocks/{block_id}/generate-plan", headers=headers)["tasks"]

    # --- tasks ----------------------------------------------------------

    def get_task(self, task_id: int) -> Dict[str, Any]:
        return self._request("GET", f"/api/tasks/{task_id}")["task"]

    def update_task(self, task_id: int, **fields) -> Dict[str, Any]:
        return self._request("PATCH", f"/api/tasks/{task_id}", json=fields)["task"]

    def set_completed(self, task_id: int, completed: bool) -> Dict[str, Any]:
        return self.update_task(task_id, completed=completed)

    def generate_summary(self, task_id: int) -> Dict[str, Any]:
        return self._request("POST", f"/api/tasks/{task_id}/generate-summary")

    def tasks_today(self, day: Optional[date] = None) -> List[Dict[str, Any]]:
        params = {"day": day.isoformat()} if day else None
        return self._request("GET", "/api/tasks/today", params=params)["tasks"]

    # --------------------------------------------------------------------

    def _request(self, method: str, path: str, headers: Optional[Dict[str, str]] = None, **kwargs) -> Dict[str, Any]:
        headers = dict(headers or {})
        if self.token:
            headers["Authorization"] = f"Bearer {self.token}"
        response = self.client.request(method, path, headers=headers, **kwargs)
        if response.status_code >= 400:
            try:
                message = response.json().get("error", response.text)
            except ValueError:
                message = response.text
            raise ApiError(response.status_code, message)
        return response.json()


def session_client(state, base_url: str) -> StudyPlannerClient:
    """
    One client per Streamlit session, kept across reruns.

    ``state`` is ``st.session_state``. The client is not shared between
    sessions because its ``httpx.Client`` keeps the login cookie.
    """
    api = state.get("api")
    if api is None:
        api = state["api"] = StudyPlannerClient(base_url)
    api.token = state.get("token")
    return api


def save_completion(api: StudyPlannerClient, task_id: int, completed: bool) -> Optional[str]:
    """Persist a checkbox change; returns the API's error message if it failed"""
    try:
        api.set_completed(task_id, completed)
    except ApiError as e:
        return e.message
    return None
