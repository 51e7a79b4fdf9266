"""Declarative resource adapter around the encryption engine.

The `rsa_ciphertext` resource is create-only: reading returns the persisted state untouched, deleting just lets the
host forget it, and any change to an input replaces the resource instead of updating it. There is no remote state to
reconcile against, so nothing here ever needs to detect drift.

Typical usage example:

    res = provider.resource("rsa_ciphertext")
    state = res.apply(None, {"plaintext": "Hello World", "public_key": pem_text})
    state.attributes["ciphertext"]
"""
# Copyright (c) 2025-present Tech. TTGames
# SPDX-License-Identifier: EPL-2.0
import enum
import types
import typing

from rsaciphertext import keys
from rsaciphertext import rsa
from rsaciphertext.errors import InvalidConfig
from rsaciphertext.identity import state_id
from rsaciphertext.logger import logger


class Attribute(typing.NamedTuple):
    description: str
    required: bool = False
    default: str | None = None
    force_new: bool = True
    computed: bool = False
    validator: typing.Callable[[str], typing.Any] | None = None


DESCRIPTION = " ".join("""
Encrypts plain text using an RSA public key with support for PKCS1.5 and OAEP.
Since RSA encryption includes random padding, passing the same input text to multiple
resources will result in different ciphertext each time.
""".split())

SCHEMA: dict[str, Attribute] = {
    "plaintext":
        Attribute("The plaintext to encrypt", required=True),
    "public_key":
        Attribute("The public key used for encryption, in PEM format", required=True, validator=keys.validate),
    "padding":
        Attribute("The padding mode to use", default=rsa.Padding.PKCS1V15.value, validator=rsa.Padding.parse),
    "hash":
        Attribute("The hash algorithm to use, for OAEP only", default=rsa.HashName.SHA256.value,
                  validator=rsa.HashName.parse),
    "ciphertext":
        Attribute("The encrypted ciphertext, base64 encoded", force_new=False, computed=True),
}


class Action(enum.Enum):
    CREATE = "create"
    NOOP = "noop"
    REPLACE = "replace"


class ResourceState(typing.NamedTuple):
    """Persisted state of one resource instance. Attributes are read-only."""
    id: str
    attributes: typing.Mapping[str, str]


class CiphertextResource:
    """The `rsa_ciphertext` resource type."""
    type_name = "rsa_ciphertext"
    description = DESCRIPTION
    schema = SCHEMA

    def validate(self, config: typing.Mapping[str, typing.Any]) -> dict[str, str]:
        """Checks a configuration and fills in the defaults.

        Enumerated values come back in their canonical spelling, so "oaep" and "OAEP" configure the same resource.

        Args:
            config: The user supplied input attributes.

        Returns:
            The normalised inputs.

        Raises:
            InvalidConfig: On unknown, computed, missing or non-string attributes.
            InvalidPublicKey: If the public key does not validate.
            InvalidPaddingOrHash: If padding or hash is not supported.
        """
        return self._check(config)[0]

    def _check(self, config: typing.Mapping[str, typing.Any]) -> tuple[dict[str, str], dict[str, typing.Any]]:
        """Like validate, but also hands back what each field validator parsed, by attribute name."""
        unknown = sorted(set(config) - {name for name, attr in self.schema.items() if not attr.computed})
        if unknown:
            raise InvalidConfig(f"Unsupported or computed attributes: {', '.join(unknown)}")
        result = {}
        parsed = {}
        for name, attr in self.schema.items():
            if attr.computed:
                continue
            value = config.get(name)
            if value is None:
                value = attr.default
            if value is None:
                raise InvalidConfig(f"The argument {name!r} is required, but no definition was found.")
            if not isinstance(value, str):
                raise InvalidConfig(f"The argument {name!r} must be a string, got {type(value).__name__}.")
            if attr.validator is not None:
                checked = parsed[name] = attr.validator(value)
                if isinstance(checked, enum.Enum):
                    value = checked.value
            result[name] = value
        return result, parsed

    def create(self, config: typing.Mapping[str, typing.Any]) -> ResourceState:
        """Encrypts the plaintext and returns the new state.

        Raises:
            CiphertextError: If the configuration is invalid or encryption fails. No state is produced then.
        """
        inputs, parsed = self._check(config)
        req = rsa.EncryptionRequest(inputs["plaintext"].encode("utf-8"), parsed["public_key"], parsed["padding"],
                                    parsed["hash"])
        res = rsa.encrypt(req)
        attributes = dict(inputs, ciphertext=res.encoded)
        state = ResourceState(state_id(res.encoded), types.MappingProxyType(attributes))
        logger.debug("Created %s %s", self.type_name, state.id)
        return state

    def read(self, state: ResourceState) -> ResourceState:
        return state

    def delete(self, state: ResourceState) -> None:
        logger.debug("Forgetting %s %s", self.type_name, state.id)

    def plan(self, state: ResourceState | None, config: typing.Mapping[str, typing.Any]) -> Action:
        """Decides the transition from the persisted state to the configuration.

        Every input forces a new resource, so the only transitions are create, replace and no-op.
        """
        inputs = self.validate(config)
        if state is None:
            return Action.CREATE
        changed = [name for name, value in inputs.items() if state.attributes.get(name) != value]
        if changed:
            logger.debug("%s %s must be replaced, changed: %s", self.type_name, state.id, ", ".join(changed))
            return Action.REPLACE
        return Action.NOOP

    def apply(self, state: ResourceState | None, config: typing.Mapping[str, typing.Any]) -> ResourceState:
        """Brings the resource in line with the configuration.

        Args:
            state: The persisted state, None if the resource does not exist yet.
            config: The user supplied input attributes.

        Returns:
            The state to persist.
        """
        match self.plan(state, config):
            case Action.CREATE:
                return self.create(config)
            case Action.REPLACE:
                self.delete(state)
                return self.create(config)
            case Action.NOOP:
                return self.read(state)


class Provider:
    """Registry of the resource types offered to the host.

    Attributes:
        version: Version reported to the host.
        resources: Resource types by type name.
        data_sources: Data source types by type name. There are none.
    """

    def __init__(self, version: str) -> None:
        self.version = version
        self.resources: dict[str, type[CiphertextResource]] = {CiphertextResource.type_name: CiphertextResource}
        self.data_sources: dict[str, type] = {}

    def resource(self, type_name: str) -> CiphertextResource:
        """Instantiates a resource type by name.

        Raises:
            KeyError: If the provider has no such resource type.
        """
        try:
            return self.resources[type_name]()
        except KeyError:
            raise KeyError(f"Unknown resource type {type_name!r}") from None
