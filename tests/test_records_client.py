import base64
import json

import httpx
import pytest

from integrations.content_manager.http import ContentManagerHTTP
from integrations.content_manager.records_client import RecordsAPIError, RecordsClient
from signed_records.models import AttachDocumentRequest, CreateRecordRequest


def _client(handler) -> RecordsClient:
    http = ContentManagerHTTP(
        username="svc",
        password="pw",
        base_url="https://cm.test/ServiceAPI",
        transport=httpx.MockTransport(handler),
    )
    return RecordsClient(http)


@pytest.mark.anyio
async def test_create_record_posts_metadata_with_basic_auth():
    seen = []

    def handler(request: httpx.Request) -> httpx.Response:  # noqa: D401
        seen.append(request)
        return httpx.Response(201, json={"Results": [{"Uri": "/Records/42"}], "TotalResults": 1})

    async with _client(handler) as client:
        uri = await client.create_record(CreateRecordRequest())

    assert uri == "/Records/42"
    req = seen[0]
    assert req.method == "POST"
    assert req.url.path == "/ServiceAPI/Record"
    assert json.loads(req.content) == {
        "RecordTitle": "Adobe Sign Integration Demo 3",
        "RecordRecordType": "Document",
    }
    expected = "Basic " + base64.b64encode(b"svc:pw").decode()
    assert req.headers["Authorization"] == expected
    assert req.headers["Content-Type"] == "application/json"


@pytest.mark.anyio
async def test_numeric_uri_is_returned_unchanged():
    client = _client(lambda request: httpx.Response(200, json={"Results": [{"Uri": 9000000001}]}))
    uri = await client.create_record(CreateRecordRequest())
    assert uri == 9000000001
    assert isinstance(uri, int)
    await client.http.aclose()


@pytest.mark.anyio
@pytest.mark.parametrize(
    "body",
    [{}, {"Results": []}, {"Results": [{"Title": "x"}]}, {"Results": "x"}, {"Results": [7]}, ["x"], "ok"],
)
async def test_create_record_without_uri_raises(body):
    client = _client(lambda request: httpx.Response(200, json=body))
    with pytest.raises(RecordsAPIError):
        await client.create_record(CreateRecordRequest())
    await client.http.aclose()


@pytest.mark.anyio
async def test_create_record_server_error_raises():
    client = _client(lambda request: httpx.Response(500, json={"ResponseStatus": {"Message": "boom"}}))
    with pytest.raises(httpx.HTTPStatusError):
        await client.create_record(CreateRecordRequest())
    await client.http.aclose()


@pytest.mark.anyio
async def test_attach_document_uses_record_endpoint():
    seen = []

    def handler(request: httpx.Request) -> httpx.Response:  # noqa: D401
        seen.append(request)
        return httpx.Response(200, json={"Results": [{"Uri": "/Records/42"}]})

    async with _client(handler) as client:
        await client.attach_document(
            AttachDocumentRequest(uri="/Records/42", record_file_path="abc.pdf")
        )

    req = seen[0]
    assert req.url.path == "/ServiceAPI/Record"
    body = json.loads(req.content)
    assert body == {"Uri": "/Records/42", "RecordFilePath": "abc.pdf"}
    assert list(body) == ["Uri", "RecordFilePath"]


@pytest.mark.anyio
async def test_attach_document_rejects_non_object_reply():
    client = _client(lambda request: httpx.Response(200, json=[]))
    with pytest.raises(RecordsAPIError, match="expected an object"):
        await client.attach_document(AttachDocumentRequest(uri=42, record_file_path="abc.pdf"))
    await client.http.aclose()


def test_attach_request_keeps_uri_type():
    assert AttachDocumentRequest(uri=9000000001, record_file_path="a.pdf").model_dump(by_alias=True) == {
        "Uri": 9000000001,
        "RecordFilePath": "a.pdf",
    }
    assert AttachDocumentRequest(uri="/Records/42", record_file_path="a.pdf").uri == "/Records/42"
