"""Shared fixtures: a stub requests transport standing in for facebook.com."""

from typing import Optional

import pytest
import requests
from requests.adapters import BaseAdapter

from fbmedia.config import Config, FetchConfig
from fbmedia.extractors import MediaExtractor
from fbmedia.facebook_client import FacebookClient


class StubAdapter(BaseAdapter):
    """Answers every request with a canned body/status, or raises exc."""

    def __init__(
        self,
        body: str = "",
        status_code: int = 200,
        exc: Optional[Exception] = None,
    ):
        super().__init__()
        self.body = body
        self.status_code = status_code
        self.exc = exc
        self.calls = []

    def send(self, request, **kwargs):
        self.calls.append((request, kwargs))
        if self.exc is not None:
            raise self.exc

        response = requests.Response()
        response.status_code = self.status_code
        response.reason = "OK" if self.status_code < 400 else "Error"
        response._content = self.body.encode("utf-8")
        response.encoding = "utf-8"
        response.url = request.url
        response.request = request
        return response

    def close(self):
        pass


def make_client(adapter: StubAdapter) -> FacebookClient:
    session = requests.Session()
    session.mount("https://", adapter)
    session.mount("http://", adapter)
    return FacebookClient(FetchConfig(), session=session)


@pytest.fixture
def stub():
    return StubAdapter()


@pytest.fixture
def client(stub):
    return make_client(stub)


@pytest.fixture
def extractor(client):
    return MediaExtractor(client)


@pytest.fixture
def config():
    return Config()
