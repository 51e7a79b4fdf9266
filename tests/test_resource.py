# pylint: disable=missing-module-docstring,redefined-outer-name
# Copyright (c) 2025-present Tech. TTGames
# SPDX-License-Identifier: EPL-2.0
import base64

from cryptography.hazmat.primitives import hashes
from cryptography.hazmat.primitives import serialization
from cryptography.hazmat.primitives.asymmetric import padding
import pytest

import rsaciphertext
from rsaciphertext import pem
from rsaciphertext import resource
from rsaciphertext.identity import state_id


@pytest.fixture(scope="module")
def pem_text(key2048) -> str:
    return key2048.public_key().public_bytes(serialization.Encoding.PEM,
                                             serialization.PublicFormat.SubjectPublicKeyInfo).decode("ascii")


@pytest.fixture(scope="module")
def other_pem_text(key1024) -> str:
    return key1024.public_key().public_bytes(serialization.Encoding.PEM,
                                             serialization.PublicFormat.SubjectPublicKeyInfo).decode("ascii")


@pytest.fixture()
def res() -> resource.CiphertextResource:
    return rsaciphertext.provider.resource("rsa_ciphertext")


@pytest.fixture()
def config(pem_text) -> dict:
    return {"plaintext": "Hello World", "public_key": pem_text}


def test_schema():
    schema = resource.SCHEMA
    assert schema["padding"].default == "PKCS1.5"
    assert schema["hash"].default == "SHA256"
    assert schema["plaintext"].required and schema["public_key"].required
    assert all(attr.force_new for name, attr in schema.items() if name != "ciphertext")
    assert schema["ciphertext"].computed
    assert not schema["ciphertext"].force_new


def test_description():
    assert "\n" not in resource.DESCRIPTION
    assert resource.DESCRIPTION.startswith("Encrypts plain text using an RSA public key")
    assert "different ciphertext each time." in resource.DESCRIPTION


def test_validate_defaults(res, config, pem_text):
    assert res.validate(config) == {
        "plaintext": "Hello World",
        "public_key": pem_text,
        "padding": "PKCS1.5",
        "hash": "SHA256",
    }


def test_validate_normalises_case(res, config):
    inputs = res.validate(dict(config, padding="oaep", hash="sha512"))
    assert inputs["padding"] == "OAEP"
    assert inputs["hash"] == "SHA512"


def test_validate_none_uses_default(res, config):
    assert res.validate(dict(config, padding=None))["padding"] == "PKCS1.5"


@pytest.mark.parametrize("missing", ["plaintext", "public_key"])
def test_validate_missing(res, config, missing):
    del config[missing]
    with pytest.raises(rsaciphertext.InvalidConfig, match=missing):
        res.validate(config)


@pytest.mark.parametrize("extra", ["ciphertext", "label"])
def test_validate_unknown(res, config, extra):
    with pytest.raises(rsaciphertext.InvalidConfig, match=extra):
        res.validate(dict(config, **{extra: "x"}))


def test_validate_type(res, config):
    with pytest.raises(rsaciphertext.InvalidConfig, match="must be a string"):
        res.validate(dict(config, plaintext=b"bytes"))


@pytest.mark.parametrize("field,value,exc", [("public_key", "garbage", rsaciphertext.NoPEMBlock),
                                             ("padding", "PSS", rsaciphertext.InvalidPaddingOrHash),
                                             ("hash", "SHA1", rsaciphertext.InvalidPaddingOrHash)])
def test_validate_fields(res, config, field, value, exc):
    with pytest.raises(exc):
        res.validate(dict(config, **{field: value}))


def test_create(res, config, key2048):
    state = res.create(config)
    ciphertext = state.attributes["ciphertext"]
    assert state.id == state_id(ciphertext)
    assert len(state.id) == 40
    raw = base64.b64decode(ciphertext)
    assert len(raw) == 256
    assert key2048.decrypt(raw, padding.PKCS1v15()) == b"Hello World"


def test_create_oaep(res, config, key2048):
    state = res.create(dict(config, padding="OAEP", hash="SHA512"))
    raw = base64.b64decode(state.attributes["ciphertext"])
    oaep = padding.OAEP(mgf=padding.MGF1(algorithm=hashes.SHA512()), algorithm=hashes.SHA512(), label=None)
    assert key2048.decrypt(raw, oaep) == b"Hello World"
    assert state.attributes["padding"] == "OAEP"


def test_create_parses_key_once(mocker, res, config):
    spy = mocker.spy(pem, "decode_pem")
    res.create(config)
    assert spy.call_count == 1


def test_create_twice_differs(res, config):
    assert res.create(config).id != res.create(config).id


def test_create_state_is_readonly(res, config):
    state = res.create(config)
    with pytest.raises(TypeError):
        state.attributes["ciphertext"] = "forged"


def test_create_too_large(res, config):
    with pytest.raises(rsaciphertext.PlaintextTooLarge):
        res.create(dict(config, plaintext="A" * 300))


def test_read_delete_noop(res, config):
    state = res.create(config)
    assert res.read(state) is state
    assert res.delete(state) is None


def test_plan_create(res, config):
    assert res.plan(None, config) is resource.Action.CREATE


def test_plan_noop(res, config):
    state = res.create(config)
    assert res.plan(state, config) is resource.Action.NOOP
    assert res.plan(state, dict(config, padding="pkcs1.5", hash="sha256")) is resource.Action.NOOP


@pytest.mark.parametrize("field", ["plaintext", "public_key", "padding", "hash"])
def test_plan_replace(res, config, other_pem_text, field):
    state = res.create(config)
    changed = {"plaintext": "Goodbye World", "public_key": other_pem_text, "padding": "OAEP", "hash": "SHA512"}
    assert res.plan(state, dict(config, **{field: changed[field]})) is resource.Action.REPLACE


def test_plan_validates_first(res, config):
    state = res.create(config)
    with pytest.raises(rsaciphertext.InvalidPaddingOrHash):
        res.plan(state, dict(config, padding="nope"))


def test_apply(mocker, res, config):
    state = res.apply(None, config)
    assert res.apply(state, config) is state
    delete = mocker.spy(res, "delete")
    replaced = res.apply(state, dict(config, plaintext="Goodbye World"))
    delete.assert_called_once_with(state)
    assert replaced.id != state.id
    assert replaced.attributes["plaintext"] == "Goodbye World"


def test_provider():
    prov = rsaciphertext.provider
    assert prov.version == rsaciphertext.__version__
    assert list(prov.resources) == ["rsa_ciphertext"]
    assert prov.data_sources == {}
    assert isinstance(prov.resource("rsa_ciphertext"), rsaciphertext.CiphertextResource)
    with pytest.raises(KeyError, match="rsa_plaintext"):
        prov.resource("rsa_plaintext")
