"""
Abelian SDK Abec RPC Client Tests
"""

import base64
import json
import pytest
import httpx

from abelsdk.config import RPCConfig, SDKConfig
from abelsdk.core.tx import SignedRawTx
from abelsdk.errors import RPCError
from abelsdk.network.rpc import AbecRPCClient

ENDPOINT = "https://127.0.0.1:18665"


class FakeAbec:
    """Answers JSON-RPC requests from a method -> result table."""

    def __init__(self, results=None, errors=None):
        self.results = results or {}
        self.errors = errors or {}
        self.requests = []

    def __call__(self, request: httpx.Request) -> httpx.Response:
        body = json.loads(request.content)
        self.requests.append((request, body))
        method = body["method"]
        key = (method, json.dumps(body["params"]))

        if method in self.errors:
            return httpx.Response(200, json={"result": None, "error": self.errors[method], "id": body["id"]})
        result = self.results.get(key, self.results.get(method))
        if callable(result):
            result = result(*body["params"])
        return httpx.Response(200, json={"result": result, "error": None, "id": body["id"]})


def make_client(abec: FakeAbec) -> AbecRPCClient:
    transport = httpx.MockTransport(abec)
    return AbecRPCClient(
        ENDPOINT,
        "user",
        "pass",
        client=httpx.AsyncClient(transport=transport),
    )


def block_hex(height: int) -> str:
    return (b"BLOCK" + height.to_bytes(8, "big")).hex()


class TestRequestShape:
    """Tests for the JSON-RPC envelope."""

    @pytest.mark.asyncio
    async def test_envelope_and_auth(self):
        abec = FakeAbec({"getinfo": {"blocks": 12345, "testnet": True, "netid": 1}})
        rpc = make_client(abec)

        info = await rpc.get_chain_info()

        assert info.num_blocks == 12345
        assert info.is_testnet is True
        assert info.net_id == 1

        request, body = abec.requests[0]
        assert request.method == "POST"
        assert request.url.host == "127.0.0.1"
        assert request.url.port == 18665
        assert body["jsonrpc"] == "1.0"
        assert body["method"] == "getinfo"
        assert body["params"] == []
        assert body["id"].isdigit()
        expected_auth = "Basic " + base64.b64encode(b"user:pass").decode()
        assert request.headers["Authorization"] == expected_auth

    @pytest.mark.asyncio
    async def test_error_member_raises(self):
        abec = FakeAbec(errors={"getblockhash": {"code": -8, "message": "Block height out of range"}})
        rpc = make_client(abec)

        with pytest.raises(RPCError) as exc_info:
            await rpc.get_block_hash(10**9)
        assert exc_info.value.method == "getblockhash"
        assert exc_info.value.error["code"] == -8

    @pytest.mark.asyncio
    async def test_non_json_response(self):
        rpc = AbecRPCClient(
            ENDPOINT,
            client=httpx.AsyncClient(transport=httpx.MockTransport(lambda r: httpx.Response(401, text="Unauthorized"))),
        )
        with pytest.raises(RPCError):
            await rpc.get_chain_info()


class TestMethods:
    """Tests for individual RPC methods."""

    @pytest.mark.asyncio
    async def test_mempool(self):
        abec = FakeAbec({"getrawmempool": {"aa" * 32: {"size": 100, "fee": 0.1, "height": 7}}})
        mempool = await make_client(abec).get_mempool()

        assert abec.requests[0][1]["params"] == [True]
        entry = mempool["aa" * 32]
        assert entry.size == 100
        assert entry.height == 7

    @pytest.mark.asyncio
    async def test_block_by_height(self):
        abec = FakeAbec({
            "getblockhash": lambda h: f"{h:064x}",
            "getblockabe": lambda block_hash, verbose: {
                "height": int(block_hash, 16),
                "hash": block_hash,
                "tx": ["11" * 32],
                "rawTx": [{"txid": "11" * 32, "vout": [{"n": 0, "script": "00"}]}],
            },
        })
        block = await make_client(abec).get_block_by_height(42)

        assert block.height == 42
        assert block.tx_hashes == ["11" * 32]
        assert block.raw_txs[0].vout[0].script == "00"
        assert abec.requests[1][1]["params"] == [f"{42:064x}", 1]

    @pytest.mark.asyncio
    async def test_block_bytes_by_height(self):
        abec = FakeAbec({
            "getblockhash": lambda h: f"{h:064x}",
            "getblockabe": lambda block_hash, verbose: block_hex(int(block_hash, 16)),
        })
        data = await make_client(abec).get_block_bytes_by_height(9)

        assert data == b"BLOCK" + (9).to_bytes(8, "big")
        assert abec.requests[1][1]["params"] == [f"{9:064x}", 0]

    @pytest.mark.asyncio
    async def test_raw_tx(self):
        abec = FakeAbec({
            "getrawtransaction": lambda tx_hash, verbose: {
                "txid": tx_hash,
                "fee": 0.1,
                "vin": [{"serialnumber": "ab", "prevutxoring": {"version": 1, "blockhashs": ["01", "02", "03"]}}],
            } if verbose else "deadbeef",
        })
        rpc = make_client(abec)

        tx = await rpc.get_raw_tx("22" * 32)
        assert tx.txid == "22" * 32
        assert tx.vin[0].serial_number == "ab"
        assert tx.vin[0].ring_block_hashes == ["01", "02", "03"]

        assert await rpc.get_tx_bytes("22" * 32) == bytes.fromhex("deadbeef")
        assert abec.requests[1][1]["params"] == ["22" * 32, False]

    @pytest.mark.asyncio
    async def test_ring_block_descs(self):
        abec = FakeAbec({
            "getblockhash": lambda h: f"{h:064x}",
            "getblockabe": lambda block_hash, verbose: block_hex(int(block_hash, 16)),
        })
        descs = await make_client(abec).get_ring_block_descs(301)

        assert sorted(descs) == [300, 301, 302]
        for h, desc in descs.items():
            assert desc.height == h
            assert desc.bin_data == b"BLOCK" + h.to_bytes(8, "big")

    def test_estimated_fee(self):
        rpc = AbecRPCClient(ENDPOINT, client=httpx.AsyncClient())
        assert rpc.get_estimated_tx_fee() == 1_000_000


class TestSubmission:
    """Tests for broadcasting signed transactions."""

    @pytest.mark.asyncio
    async def test_submit_success(self):
        abec = FakeAbec({"sendrawtransactionabe": lambda tx_hex: "33" * 32})
        signed = SignedRawTx(data=b"\x01\x02\x03", txid=b"\x33" * 32)

        result = await make_client(abec).submit_signed_raw_tx(signed)

        assert result.success is True
        assert result.error == ""
        assert result.signed_raw_tx is signed
        assert result.submission_time > 0
        assert abec.requests[0][1]["params"] == ["010203"]

    @pytest.mark.asyncio
    async def test_submit_rpc_failure_reported(self):
        abec = FakeAbec(errors={"sendrawtransactionabe": {"code": -26, "message": "rejected"}})
        signed = SignedRawTx(data=b"\x01", txid=b"\x00" * 32)

        result = await make_client(abec).submit_signed_raw_tx(signed)

        assert result.success is False
        assert "rejected" in result.error

    @pytest.mark.asyncio
    async def test_submit_transport_failure_reported(self):
        def refuse(request):
            raise httpx.ConnectError("connection refused", request=request)

        rpc = AbecRPCClient(ENDPOINT, client=httpx.AsyncClient(transport=httpx.MockTransport(refuse)))
        result = await rpc.submit_signed_raw_tx(SignedRawTx(data=b"\x01", txid=b"\x00" * 32))

        assert result.success is False
        assert "connection refused" in result.error


class TestLifecycle:
    """Tests for client ownership."""

    @pytest.mark.asyncio
    async def test_external_client_not_closed(self):
        client = httpx.AsyncClient(transport=httpx.MockTransport(FakeAbec()))
        async with AbecRPCClient(ENDPOINT, client=client):
            pass
        assert not client.is_closed
        await client.aclose()

    @pytest.mark.asyncio
    async def test_owned_client_closed(self):
        rpc = AbecRPCClient(ENDPOINT)
        async with rpc:
            pass
        assert rpc._client.is_closed

    def test_from_config(self):
        config = RPCConfig(endpoint="https://node:1", username="u", password="hunter2", timeout_sec=3.0)
        rpc = AbecRPCClient.from_config(config, client=httpx.AsyncClient())
        assert rpc.endpoint == "https://node:1"
        assert rpc.timeout == 3.0
        assert "hunter2" not in repr(rpc)


class TestTLSVerification:
    """Tests for certificate verification on clients the SDK creates."""

    @pytest.fixture
    def created(self, monkeypatch):
        captured = []
        real_client = httpx.AsyncClient

        def recording_client(**kwargs):
            captured.append(kwargs)
            return real_client(**kwargs)

        monkeypatch.setattr(httpx, "AsyncClient", recording_client)
        return captured

    def test_verifies_by_default(self, created):
        rpc = AbecRPCClient("https://node.example:18665", "u", "p")
        assert rpc.verify is True
        assert created[-1]["verify"] is True

    def test_opt_out(self, created):
        AbecRPCClient("https://node.example:18665", verify=False)
        assert created[-1]["verify"] is False

    def test_from_config_carries_verify(self, created):
        AbecRPCClient.from_config(RPCConfig())
        assert created[-1]["verify"] is True

        AbecRPCClient.from_config(RPCConfig(verify=False))
        assert created[-1]["verify"] is False

    def test_config_round_trip(self, tmp_path):
        config = SDKConfig()
        config.rpc.verify = False
        path = tmp_path / "config.json"
        config.save(str(path))
        assert SDKConfig.load(str(path)).rpc.verify is False
