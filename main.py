from rich.pretty import pprint

from argot import *


registry = Registry("test", shell=True)

iterations = registry.option(["i", "iterations"], "n", "Total iterations", to_int)
sleep = registry.option(
    ["s", "sleep"],
    "milliseconds",
    "Amount to sleep between each run blah blah blah-de-blah yadda yadda yadda ya-ya ya blah blah la-de frickin da",
    to_int
)
verbose = registry.flag(["v", "verbose"], True, "Enable verbose messages", names_off=["q", "quiet"])
users = registry.multi_option(["u", "user"], "username", "Name of user to receive notifications.")


def email_address(token, option, /):
    if token.find("@") < 1:
        registry.usage("Bad email address")
    return token


email = registry.option(["e", "email"], "emailaddr", "Addresses to email results", email_address)
output = registry.parameter("output", "output file", False)
inputs = registry.multi_parameter("input", "input count", True, to_int)


if __name__ == '__main__':
    registry.parse()
    pprint(registry)
