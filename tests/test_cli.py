"""
Tests for the command-line entry point (python -m system_program_events).
"""

from __future__ import annotations

import io
import json
import struct

import base58
from solders.pubkey import Pubkey

from system_program_events.__main__ import main
from system_program_events.constants import SYSTEM_PROGRAM_ID

PAYER = str(Pubkey.from_bytes(bytes([1]) * 32))
RECIPIENT = str(Pubkey.from_bytes(bytes([2]) * 32))


def _block_result() -> dict:
    transfer = base58.b58encode(struct.pack("<IQ", 2, 500)).decode("ascii")
    truncated = base58.b58encode(b"\x02\x00\x00\x00\x01").decode("ascii")
    return {
        "blockhash": "bh",
        "parentSlot": 1,
        "transactions": [
            {
                "transaction": {
                    "signatures": ["cliSig"],
                    "message": {
                        "accountKeys": [PAYER, RECIPIENT, SYSTEM_PROGRAM_ID],
                        "instructions": [
                            {"programIdIndex": 2, "accounts": [0, 1], "data": transfer},
                            {"programIdIndex": 2, "accounts": [0, 1], "data": truncated},
                        ],
                    },
                },
                "meta": {"err": None, "innerInstructions": []},
            }
        ],
    }


def test_cli_reads_file(tmp_path, capsys):
    path = tmp_path / "block.json"
    path.write_text(json.dumps(_block_result()), encoding="utf-8")
    assert main([str(path)]) == 0
    out = json.loads(capsys.readouterr().out)
    assert out["transactions"][0]["signature"] == "cliSig"
    assert out["transactions"][0]["events"] == [
        {
            "instruction_index": 0,
            "transfer": {"funding_account": PAYER, "recipient_account": RECIPIENT, "lamports": 500},
        }
    ]
    assert "diagnostics" not in out


def test_cli_reads_rpc_envelope_from_stdin(monkeypatch, capsys):
    envelope = {"jsonrpc": "2.0", "id": 1, "result": _block_result()}
    monkeypatch.setattr("sys.stdin", io.StringIO(json.dumps(envelope)))
    assert main(["--diagnostics"]) == 0
    out = json.loads(capsys.readouterr().out)
    assert len(out["transactions"][0]["events"]) == 1
    assert [d["code"] for d in out["diagnostics"]] == ["truncated_data"]
    assert out["diagnostics"][0]["instruction_index"] == 1


def test_cli_program_id_override(tmp_path, capsys):
    path = tmp_path / "block.json"
    path.write_text(json.dumps(_block_result()), encoding="utf-8")
    assert main([str(path), "--program-id", PAYER]) == 0
    assert json.loads(capsys.readouterr().out) == {"transactions": []}


def test_cli_missing_file(tmp_path, capsys):
    assert main([str(tmp_path / "missing.json")]) == 1
    assert "ERROR" in capsys.readouterr().err


def test_cli_invalid_json(tmp_path, capsys):
    path = tmp_path / "block.json"
    path.write_text("{not json", encoding="utf-8")
    assert main([str(path)]) == 1


def test_cli_invalid_payload(tmp_path):
    path = tmp_path / "block.json"
    path.write_text(json.dumps({"transactions": [{"transaction": "blob"}]}), encoding="utf-8")
    assert main([str(path)]) == 1


def test_cli_unknown_log_format_still_extracts(tmp_path, monkeypatch, capsys):
    monkeypatch.setenv("LOG_FORMAT", "text")
    path = tmp_path / "block.json"
    path.write_text(json.dumps(_block_result()), encoding="utf-8")
    assert main([str(path)]) == 0
    assert json.loads(capsys.readouterr().out)["transactions"][0]["signature"] == "cliSig"


def test_cli_non_string_loaded_address(tmp_path, capsys):
    result = _block_result()
    result["transactions"][0]["meta"]["loadedAddresses"] = {"writable": [7], "readonly": []}
    path = tmp_path / "block.json"
    path.write_text(json.dumps(result), encoding="utf-8")
    assert main([str(path)]) == 1
    assert "ERROR" in capsys.readouterr().err
