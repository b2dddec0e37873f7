"""Test discovery document models and loading."""

import httpx
import pytest
from pydantic import ValidationError

from apidisco.discovery import (
    DiscoveryLoader,
    DiscoveryRoot,
    GroupDocument,
    Parameter,
    fetch_group,
    fetch_root,
)
from apidisco.exceptions import DiscoveryError, DiscoveryFetchError

from apidisco.tests.fixtures import (
    DISCOVERY_URL,
    PET_STORE_DOCUMENT,
    ROOT_DOCUMENT,
    USERS_DOCUMENT,
    discovery_handler,
    mock_client,
)


class TestModels:
    """Test parsing of discovery documents."""

    def test_root_document(self):
        root = DiscoveryRoot.model_validate(ROOT_DOCUMENT)
        assert [group.path for group in root.apis] == ['/users', '/pet_store']
        assert root.apis[0].description == 'User operations'

    def test_group_document(self):
        document = GroupDocument.model_validate(USERS_DOCUMENT)
        operation = document.apis[2].operations[0]
        assert operation.nickname == 'GetPost'
        assert [param.name for param in operation.path_parameters] == ['id', 'postId']
        assert [param.name for param in operation.query_parameters] == ['limit', 'offset']
        assert operation.body_parameters == []

    def test_parameter_buckets(self):
        document = GroupDocument.model_validate(PET_STORE_DOCUMENT)
        add_pet = document.apis[0].operations[1]
        assert [param.name for param in add_pet.body_parameters] == ['name', 'status']
        assert add_pet.body_parameters[0].required is True
        assert add_pet.body_parameters[1].required is False

    def test_unknown_param_type_parses(self):
        param = Parameter.model_validate({'name': 'X-Trace', 'paramType': 'header'})
        assert not (param.is_path or param.is_query or param.is_body)

    def test_extra_fields_allowed(self):
        root = DiscoveryRoot.model_validate(
            {'apiVersion': '1.0', 'apis': [{'path': '/a', 'position': 1}]}
        )
        assert root.apis[0].description == ''

    def test_missing_apis(self):
        with pytest.raises(ValidationError):
            DiscoveryRoot.model_validate({'swaggerVersion': '1.2'})

    def test_models_are_frozen(self):
        root = DiscoveryRoot.model_validate(ROOT_DOCUMENT)
        with pytest.raises(ValidationError):
            root.apis[0].path = '/other'


class TestDiscoveryLoader:
    """Test fetching discovery documents."""

    @pytest.mark.asyncio
    async def test_fetch_root(self):
        async with mock_client(discovery_handler()) as client:
            root = await DiscoveryLoader(DISCOVERY_URL, http_client=client).fetch_root()
        assert len(root.apis) == 2

    @pytest.mark.asyncio
    async def test_fetch_group_appends_path(self):
        requests = []
        async with mock_client(discovery_handler(requests=requests)) as client:
            document = await fetch_group(DISCOVERY_URL, '/pet_store', http_client=client)
        assert str(requests[0].url) == f'{DISCOVERY_URL}/pet_store'
        assert document.apis[0].path == '/pets'

    @pytest.mark.asyncio
    async def test_headers_merged_caller_wins(self):
        requests = []
        async with mock_client(discovery_handler(requests=requests)) as client:
            await fetch_root(
                DISCOVERY_URL,
                {'accept': 'application/vnd.api+json', 'X-Token': 't'},
                http_client=client,
            )
        headers = requests[0].headers
        assert headers['Accept'] == 'application/vnd.api+json'
        assert headers['X-Token'] == 't'

    @pytest.mark.asyncio
    async def test_default_accept_header(self):
        requests = []
        async with mock_client(discovery_handler(requests=requests)) as client:
            await fetch_root(DISCOVERY_URL, http_client=client)
        assert requests[0].headers['Accept'] == 'application/json'

    @pytest.mark.asyncio
    async def test_http_error_status(self):
        async with mock_client(discovery_handler(documents={})) as client:
            with pytest.raises(DiscoveryFetchError) as exc_info:
                await fetch_root(DISCOVERY_URL, http_client=client)
        assert exc_info.value.source == DISCOVERY_URL
        assert isinstance(exc_info.value.cause, httpx.HTTPStatusError)

    @pytest.mark.asyncio
    async def test_non_json_body(self):
        def handler(request):
            return httpx.Response(200, text='<html>not json</html>')

        async with mock_client(handler) as client:
            with pytest.raises(DiscoveryFetchError):
                await fetch_root(DISCOVERY_URL, http_client=client)

    @pytest.mark.asyncio
    async def test_missing_apis_field(self):
        async with mock_client(discovery_handler({DISCOVERY_URL: {}})) as client:
            with pytest.raises(DiscoveryError, match='Failed to fetch discovery document'):
                await fetch_root(DISCOVERY_URL, http_client=client)

    @pytest.mark.asyncio
    async def test_transport_error(self):
        def handler(request):
            raise httpx.ConnectError('connection refused', request=request)

        async with mock_client(handler) as client:
            with pytest.raises(DiscoveryFetchError, match='connection refused'):
                await fetch_root(DISCOVERY_URL, http_client=client)
