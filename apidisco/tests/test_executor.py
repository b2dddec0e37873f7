"""Test request execution and response negotiation."""

import json

import httpx
import pytest

from apidisco.client.executor import RequestExecutor
from apidisco.exceptions import ApiError, ResponseDecodeError, UnsupportedContentTypeError

from apidisco.tests.fixtures import json_response, mock_client


class TestHandleResponse:
    """Test decoding of responses by status and content type."""

    @pytest.fixture
    def executor(self):
        return RequestExecutor()

    def test_json_keys_are_camelized(self, executor):
        response = json_response({'user_id': 1})
        assert executor.handle_response(response) == {'userId': 1}

    def test_nested_json_keys_are_camelized(self, executor):
        response = json_response(
            {'user_posts': [{'post_id': 1, 'created_at': 'now'}], 'total_count': 1}
        )
        assert executor.handle_response(response) == {
            'userPosts': [{'postId': 1, 'createdAt': 'now'}],
            'totalCount': 1,
        }

    def test_json_list_payload(self, executor):
        response = json_response([{'pet_name': 'Rex'}])
        assert executor.handle_response(response) == [{'petName': 'Rex'}]

    def test_html_returns_raw_response(self, executor):
        response = httpx.Response(
            200, text='<p>hi</p>', headers={'content-type': 'text/html; charset=utf-8'}
        )
        assert executor.handle_response(response) is response

    def test_non_200_raises_api_error(self, executor):
        response = json_response({'error': 'nope'}, status_code=404)
        with pytest.raises(ApiError) as exc_info:
            executor.handle_response(response)
        assert exc_info.value.status_code == 404
        assert exc_info.value.reason == 'Not Found'
        assert '404' in str(exc_info.value)
        assert exc_info.value.response is response

    def test_created_is_not_200(self, executor):
        with pytest.raises(ApiError, match='201'):
            executor.handle_response(json_response({}, status_code=201))

    def test_invalid_json_body_raises_api_error(self, executor):
        response = httpx.Response(
            200, content=b'{not json', headers={'content-type': 'application/json'}
        )
        with pytest.raises(ResponseDecodeError) as exc_info:
            executor.handle_response(response)
        assert isinstance(exc_info.value, ApiError)
        assert exc_info.value.response is response
        assert 'Invalid JSON' in str(exc_info.value)

    def test_other_content_type_raises(self, executor):
        response = httpx.Response(
            200, content=b'raw', headers={'content-type': 'application/octet-stream'}
        )
        with pytest.raises(UnsupportedContentTypeError) as exc_info:
            executor.handle_response(response)
        assert exc_info.value.content_type == 'application/octet-stream'
        assert 'application/octet-stream' in str(exc_info.value)


class TestExecute:
    """Test sending requests."""

    @pytest.mark.asyncio
    async def test_sends_method_headers_and_json_body(self):
        seen = []

        def handler(request):
            seen.append(request)
            return json_response({'created_id': 5})

        async with mock_client(handler) as client:
            executor = RequestExecutor({'X-Token': 'abc'}, client)
            result = await executor.execute('post', 'https://api.example.com/pets', {'name': 'Rex'})

        assert result == {'createdId': 5}
        request = seen[0]
        assert request.method == 'POST'
        assert str(request.url) == 'https://api.example.com/pets'
        assert request.headers['X-Token'] == 'abc'
        assert json.loads(request.content) == {'name': 'Rex'}

    @pytest.mark.asyncio
    async def test_no_body_sends_no_content(self):
        seen = []

        def handler(request):
            seen.append(request)
            return json_response({})

        async with mock_client(handler) as client:
            await RequestExecutor({}, client).execute('GET', 'https://api.example.com/pets')

        assert seen[0].content == b''

    @pytest.mark.asyncio
    async def test_error_status_raises(self):
        async with mock_client(lambda request: httpx.Response(500)) as client:
            with pytest.raises(ApiError, match='500 Internal Server Error'):
                await RequestExecutor({}, client).execute('GET', 'https://api.example.com/x')

    def test_headers_are_immutable(self):
        executor = RequestExecutor({'A': '1'})
        with pytest.raises(TypeError):
            executor.headers['A'] = '2'
