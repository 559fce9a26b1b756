"""
Abelian SDK Abec RPC Client

Async JSON-RPC 1.0 client for an abec full node. Used to fetch the ring
blocks a spend needs and to broadcast signed transactions.
"""

from __future__ import annotations
import logging
import time
from dataclasses import dataclass, field
from typing import Any, Dict, List, Optional

import httpx

from abelsdk.constants import (
    ESTIMATED_TX_FEE_ABEL,
    RPC_DEFAULT_TIMEOUT_SEC,
    RPC_JSONRPC_VERSION,
)
from abelsdk.core.coin import abel_to_neutrino
from abelsdk.core.tx import SignedRawTx, TxBlockDesc, TxSubmissionResult
from abelsdk.core.types import Bytes
from abelsdk.errors import AbelSDKError, RPCError
from abelsdk.protocol.ring import get_ring_block_heights

logger = logging.getLogger(__name__)


# ==============================================================================
# Response models
# ==============================================================================

@dataclass
class AbecChainInfo:
    """Result of getinfo."""
    num_blocks: int = 0
    is_testnet: bool = False
    version: int = 0
    protocol_version: int = 0
    relay_fee: float = 0.0
    net_id: int = 0

    @classmethod
    def from_dict(cls, data: dict) -> "AbecChainInfo":
        return cls(
            num_blocks=data.get("blocks", 0),
            is_testnet=data.get("testnet", False),
            version=data.get("version", 0),
            protocol_version=data.get("protocolversion", 0),
            relay_fee=data.get("relayfee", 0.0),
            net_id=data.get("netid", 0),
        )


@dataclass
class AbecMempoolEntry:
    """One transaction of a verbose getrawmempool result."""
    size: int = 0
    full_size: int = 0
    fee: float = 0.0
    time: int = 0
    height: int = 0
    starting_priority: float = 0.0
    current_priority: float = 0.0

    @classmethod
    def from_dict(cls, data: dict) -> "AbecMempoolEntry":
        return cls(
            size=data.get("size", 0),
            full_size=data.get("fullsize", 0),
            fee=data.get("fee", 0.0),
            time=data.get("time", 0),
            height=data.get("height", 0),
            starting_priority=data.get("startingpriority", 0.0),
            current_priority=data.get("currentpriority", 0.0),
        )


@dataclass
class AbecTxVin:
    serial_number: str = ""
    ring_version: int = 0
    ring_block_hashes: List[str] = field(default_factory=list)
    ring_outpoints: List[Dict[str, Any]] = field(default_factory=list)

    @classmethod
    def from_dict(cls, data: dict) -> "AbecTxVin":
        ring = data.get("prevutxoring") or {}
        return cls(
            serial_number=data.get("serialnumber", ""),
            ring_version=ring.get("version", 0),
            ring_block_hashes=list(ring.get("blockhashs") or []),
            ring_outpoints=list(ring.get("outpoints") or []),
        )


@dataclass
class AbecTxVout:
    n: int = 0
    script: str = ""

    @classmethod
    def from_dict(cls, data: dict) -> "AbecTxVout":
        return cls(n=data.get("n", 0), script=data.get("script", ""))


@dataclass
class AbecTx:
    """Result of a verbose getrawtransaction."""
    hex: str = ""
    txid: str = ""
    tx_hash: str = ""
    time: int = 0
    block_hash: str = ""
    block_time: int = 0
    confirmations: int = 0
    version: int = 0
    size: int = 0
    full_size: int = 0
    fee: float = 0.0
    witness: str = ""
    vin: List[AbecTxVin] = field(default_factory=list)
    vout: List[AbecTxVout] = field(default_factory=list)

    @classmethod
    def from_dict(cls, data: dict) -> "AbecTx":
        return cls(
            hex=data.get("hex", ""),
            txid=data.get("txid", ""),
            tx_hash=data.get("hash", ""),
            time=data.get("time", 0),
            block_hash=data.get("blockhash", ""),
            block_time=data.get("blocktime", 0),
            confirmations=data.get("confirmations", 0),
            version=data.get("version", 0),
            size=data.get("size", 0),
            full_size=data.get("fullsize", 0),
            fee=data.get("fee", 0.0),
            witness=data.get("witness", ""),
            vin=[AbecTxVin.from_dict(v) for v in data.get("vin") or []],
            vout=[AbecTxVout.from_dict(v) for v in data.get("vout") or []],
        )


@dataclass
class AbecBlock:
    """Result of a verbose getblockabe."""
    height: int = 0
    confirmations: int = 0
    version: int = 0
    time: int = 0
    nonce: int = 0
    size: int = 0
    full_size: int = 0
    difficulty: float = 0.0
    block_hash: str = ""
    prev_block_hash: str = ""
    next_block_hash: str = ""
    merkle_root: str = ""
    tx_hashes: List[str] = field(default_factory=list)
    raw_txs: List[AbecTx] = field(default_factory=list)

    @classmethod
    def from_dict(cls, data: dict) -> "AbecBlock":
        return cls(
            height=data.get("height", 0),
            confirmations=data.get("confirmations", 0),
            version=data.get("version", 0),
            time=data.get("time", 0),
            nonce=data.get("nonce", 0),
            size=data.get("size", 0),
            full_size=data.get("fullsize", 0),
            difficulty=data.get("difficulty", 0.0),
            block_hash=data.get("hash", ""),
            prev_block_hash=data.get("previousblockhash", ""),
            next_block_hash=data.get("nextblockhash", ""),
            merkle_root=data.get("merkleroot", ""),
            tx_hashes=list(data.get("tx") or []),
            raw_txs=[AbecTx.from_dict(t) for t in data.get("rawTx") or []],
        )


# ==============================================================================
# Client
# ==============================================================================

class AbecRPCClient:
    """
    JSON-RPC client for abec.

    Usage:
        async with AbecRPCClient(endpoint, username, password) as rpc:
            info = await rpc.get_chain_info()

    A caller-supplied httpx.AsyncClient is used as is and never closed
    by this class. A client created here verifies the node certificate
    unless verify=False is passed.
    """

    def __init__(
        self,
        endpoint: str,
        username: str = "",
        password: str = "",
        client: Optional[httpx.AsyncClient] = None,
        timeout: float = RPC_DEFAULT_TIMEOUT_SEC,
        verify: bool = True,
    ):
        self.endpoint = endpoint
        self.username = username
        self._password = password
        self.timeout = timeout
        self._owns_client = client is None
        self.verify = verify
        self._client = client or httpx.AsyncClient(timeout=timeout, verify=verify)

    @classmethod
    def from_config(cls, config, client: Optional[httpx.AsyncClient] = None) -> "AbecRPCClient":
        """Create a client from an RPCConfig."""
        return cls(
            config.endpoint,
            config.username,
            config.password,
            client=client,
            timeout=config.timeout_sec,
            verify=config.verify,
        )

    def __repr__(self) -> str:
        return f"AbecRPCClient(endpoint={self.endpoint!r}, username={self.username!r})"

    async def __aenter__(self) -> "AbecRPCClient":
        return self

    async def __aexit__(self, *exc_info) -> None:
        await self.aclose()

    async def aclose(self) -> None:
        if self._owns_client:
            await self._client.aclose()

    async def _call(self, method: str, params: Optional[list] = None) -> Any:
        request_id = str(int(time.time() * 1000))
        payload = {
            "jsonrpc": RPC_JSONRPC_VERSION,
            "method": method,
            "params": params if params is not None else [],
            "id": request_id,
        }

        logger.debug(f"Request({request_id}): {method}({payload['params']})")
        try:
            resp = await self._client.post(
                self.endpoint,
                json=payload,
                auth=(self.username, self._password),
                timeout=self.timeout,
            )
        except httpx.HTTPError as e:
            logger.debug(f"Response({request_id}): ERROR({e})")
            raise

        logger.debug(f"Response({request_id}): {resp.status_code} {resp.text[:256]}")

        try:
            body = resp.json()
        except ValueError:
            raise RPCError(method, f"HTTP {resp.status_code}: non-JSON response")

        if not isinstance(body, dict):
            raise RPCError(method, f"HTTP {resp.status_code}: unexpected response")

        error = body.get("error")
        if error is not None:
            raise RPCError(method, error)

        return body.get("result")

    async def get_chain_info(self) -> AbecChainInfo:
        result = await self._call("getinfo")
        return AbecChainInfo.from_dict(result or {})

    async def get_mempool(self) -> Dict[str, AbecMempoolEntry]:
        result = await self._call("getrawmempool", [True])
        return {txid: AbecMempoolEntry.from_dict(entry) for txid, entry in (result or {}).items()}

    async def get_block_hash(self, height: int) -> str:
        return await self._call("getblockhash", [height])

    async def get_block(self, block_hash: str) -> AbecBlock:
        result = await self._call("getblockabe", [block_hash, 1])
        return AbecBlock.from_dict(result or {})

    async def get_block_bytes(self, block_hash: str) -> Bytes:
        result = await self._call("getblockabe", [block_hash, 0])
        return Bytes.from_hex(result)

    async def get_tx_bytes(self, tx_hash: str) -> Bytes:
        result = await self._call("getrawtransaction", [tx_hash, False])
        return Bytes.from_hex(result)

    async def get_raw_tx(self, tx_hash: str) -> AbecTx:
        result = await self._call("getrawtransaction", [tx_hash, True])
        return AbecTx.from_dict(result or {})

    async def get_block_by_height(self, height: int) -> AbecBlock:
        return await self.get_block(await self.get_block_hash(height))

    async def get_block_bytes_by_height(self, height: int) -> Bytes:
        return await self.get_block_bytes(await self.get_block_hash(height))

    async def get_ring_block_descs(self, height: int) -> Dict[int, TxBlockDesc]:
        """
        Fetch the ring window containing ``height``.

        Returns:
            Mapping of height to TxBlockDesc for all three ring blocks
        """
        descs = {}
        for h in get_ring_block_heights(height):
            descs[h] = TxBlockDesc(bin_data=await self.get_block_bytes_by_height(h), height=h)
        return descs

    def get_estimated_tx_fee(self) -> int:
        """Flat fee estimate in Neutrino."""
        return abel_to_neutrino(ESTIMATED_TX_FEE_ABEL)

    async def send_raw_tx(self, tx_hex: str) -> str:
        """Broadcast a transaction; returns the node's txid string."""
        return await self._call("sendrawtransactionabe", [tx_hex])

    async def submit_signed_raw_tx(self, signed_raw_tx: SignedRawTx) -> TxSubmissionResult:
        """
        Broadcast a signed transaction.

        Failures are reported in the result instead of raised.
        """
        submission_time = int(time.time() * 1000)
        try:
            await self.send_raw_tx(signed_raw_tx.data.hex())
        except (httpx.HTTPError, AbelSDKError) as e:
            logger.debug(f"Submission of {signed_raw_tx.txid.hex()} failed: {e}")
            return TxSubmissionResult(
                signed_raw_tx=signed_raw_tx,
                submission_time=submission_time,
                success=False,
                error=str(e),
            )

        logger.debug(f"Submitted {signed_raw_tx.txid.hex()}")
        return TxSubmissionResult(
            signed_raw_tx=signed_raw_tx,
            submission_time=submission_time,
            success=True,
        )
