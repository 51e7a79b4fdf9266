"""The Command Line Interface for the utility, including Interactive elements.

A hybrid CLI/ICLI that asks interactively for whatever was not given on the command line, unless non-interactive mode
is active, in which case missing values without a default are an error.

Typical usage example:

    rsaciphertext encrypt -p key.pem --message "Hello World"
    OR
    python -m rsaciphertext
"""
# Copyright (c) 2025-present Tech. TTGames
# SPDX-License-Identifier: EPL-2.0
import argparse
import logging
import pathlib
import sys
import typing

import rsaciphertext
from rsaciphertext.logger import logger


class HelpData(typing.NamedTuple):
    description: str
    format: typing.Type = str
    choices: list[str] | None = None
    default: typing.Any = None
    advanced: bool = False


help_dict: dict[str, HelpData] = {
    "subcommand":
        HelpData(
            description="The available subcommands.",
            choices=["encrypt", "validate"],
        ),
    "encrypt":
        HelpData("Encrypt a message against an RSA public key."),
    "validate":
        HelpData("Check that a file holds a usable RSA public key."),
    "public_key":
        HelpData(
            description="Location of the PEM public key file.",
            format=pathlib.Path,
        ),
    "message":
        HelpData(
            description="Message or path to file containing payload. If Path start with `P:`",
            format=str,
        ),
    "padding":
        HelpData(
            description="Padding mode.",
            choices=[p.value for p in rsaciphertext.Padding],
            default=rsaciphertext.Padding.PKCS1V15.value,
        ),
    "hash":
        HelpData(
            description="Hash algorithm, for OAEP only.",
            choices=[h.value for h in rsaciphertext.HashName],
            advanced=True,
            default=rsaciphertext.HashName.SHA256.value,
        ),
}

needs = {
    "encrypt": ("public_key", "message", "padding", "hash"),
    "validate": ("public_key",),
}

pubkey = argparse.ArgumentParser(add_help=False)
pubkey.add_argument("--public_key", "-p", type=help_dict["public_key"].format, help=help_dict["public_key"].description)
corep = argparse.ArgumentParser(prog="rsaciphertext")
corep.add_argument("--version", "-v", action="version", version=f"%(prog)s {rsaciphertext.__version__}")
corep.add_argument("--non-interactive", "-n", action="store_true", help="Enable non-interactive mode")
corep.add_argument("--advanced", "-a", action="store_true", help="Enable advanced mode, for interactive mode")
corep.add_argument("--verbose", action="store_true", help="Log debug output to stderr")
commands = corep.add_subparsers(dest="subcommand", title="Subcommands")

encrypt = commands.add_parser("encrypt", parents=[pubkey], help=help_dict["encrypt"].description)
encrypt.add_argument("--message", type=help_dict["message"].format, help=help_dict["message"].description)
encrypt.add_argument("--padding",
                     type=str.upper,
                     choices=help_dict["padding"].choices,
                     help=help_dict["padding"].description)
encrypt.add_argument("--hash", type=str.upper, choices=help_dict["hash"].choices, help=help_dict["hash"].description)
encrypt.add_argument("--show-id", action="store_true", help="Also print the state identity of the ciphertext")
validation = commands.add_parser("validate", parents=[pubkey], help=help_dict["validate"].description)


def checkmodes(arg: str, mode: tuple[bool, bool]):
    helper_data = help_dict[arg]
    if (mode[0] or (helper_data.advanced and not mode[1])) and helper_data.default:
        return helper_data.default
    if mode[0]:
        raise IOError(f"Argument {arg} is missing and non-interactive mode is active.")
    return helper_data


def choice_handler(arg: str, mode: tuple[bool, bool], prntr: typing.Callable = print):
    helper_data = checkmodes(arg, mode)
    if not isinstance(helper_data, HelpData):
        return helper_data
    prntr(f"Please specify the {arg}!")
    prntr("Description: " + helper_data.description)
    vald = {choice.upper(): choice for choice in helper_data.choices}
    for choice in helper_data.choices:
        defstring = " (Default)" if choice == helper_data.default else ""
        if help_dict.get(choice, None):
            prntr(f"{choice} - {help_dict[choice].description}" + defstring)
        else:
            prntr(f"{choice}" + defstring)
    if helper_data.default is not None:
        prntr("To accept default just click enter. Otherwise specify value.")
    while True:
        ch = input(f"{arg}: ")
        if ch.upper() in vald:
            return vald[ch.upper()]
        if not ch and helper_data.default is not None:
            return helper_data.default
        prntr("Please select an option from the list.")


def input_handler(arg: str, mode: tuple[bool, bool], prntr: typing.Callable = print):
    helper_data = checkmodes(arg, mode)
    if not isinstance(helper_data, HelpData):
        return helper_data
    prntr(f"Please specify the {arg}!")
    prntr("Description: " + helper_data.description)
    cls = helper_data.format
    while True:
        ch = input(f"{arg}: ")
        if ch == "":
            prntr("Please provide a value.")
            continue
        return cls(ch)


def check_message(mess: str) -> str:
    """Parse message for path-notice."""
    if mess.startswith("P:"):
        with open(mess[2:], "r", encoding="utf-8") as f:
            mess = f.read()
    return mess


def setup_logging() -> logging.Handler:
    """Send the package debug log to stderr."""
    handler = logging.StreamHandler(sys.stderr)
    handler.setFormatter(logging.Formatter("%(levelname)s %(name)s: %(message)s"))
    logger.addHandler(handler)
    logger.setLevel(logging.DEBUG)
    return handler


def main(argv: list[str] | None = None):
    """Core Hybrid CLI/ICLI."""
    args = corep.parse_args(argv)
    pstatus = (args.non_interactive, args.advanced)
    if args.verbose:
        setup_logging()

    def pspr(text: str):
        """Print only if not in non-interactive mode."""
        if not pstatus[0]:
            print(text)

    try:
        if not args.subcommand:
            args.subcommand = choice_handler("subcommand", pstatus)
        for reqs in needs[args.subcommand]:
            if getattr(args, reqs, None) is None:
                if help_dict[reqs].choices is not None:
                    res = choice_handler(reqs, pstatus)
                else:
                    res = input_handler(reqs, pstatus)
                setattr(args, reqs, res)
        pem_text = args.public_key.read_text(encoding="utf-8")
        key = rsaciphertext.validate(pem_text)
        match args.subcommand:
            case "encrypt":
                req = rsaciphertext.EncryptionRequest.build(check_message(args.message), key, args.padding, args.hash)
                res = rsaciphertext.encrypt(req)
                pspr("Ciphertext:")
                print(res.encoded)
                if getattr(args, "show_id", False):
                    pspr("State ID:")
                    print(rsaciphertext.state_id(res.encoded))
            case "validate":
                print(f"Valid {key.mod.bit_length()}-bit RSA public key.")
    except (rsaciphertext.CiphertextError, OSError) as err:
        print(f"Error: {err}", file=sys.stderr)
        sys.exit(1)


if __name__ == "__main__":
    main()
