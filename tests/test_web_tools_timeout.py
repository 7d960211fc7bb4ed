import asyncio
from unittest.mock import AsyncMock, MagicMock

import pytest

from other.web_tools import HTTPSessionManager, WebResponse


@pytest.mark.asyncio
async def test_get_web_request_timeout(monkeypatch):
    manager = HTTPSessionManager()
    mock_session = MagicMock()
    mock_request = MagicMock(side_effect=asyncio.TimeoutError)
    mock_session.request = mock_request
    monkeypatch.setattr(manager, 'get_session', AsyncMock(return_value=mock_session))

    response = await manager.get_web_request('GET', 'http://example.com')
    assert response.status == 408
    assert not response.ok
    assert 'timed out' in response.data.lower()
    assert 'timeout' in mock_request.call_args.kwargs


def test_web_response_ok_range():
    assert WebResponse(status=201, data={}).ok
    assert not WebResponse(status=404, data={}).ok
