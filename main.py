import base64

from rich.pretty import pprint

from cliaid import *


def encode(options):
    text = options["text"]
    pprint(base64.b64encode(text.encode()).decode())
    if options["verbose"]:
        pprint(dict(options))
    return text


def setkey(options):
    pprint({"key": options["key"], "mode": options["mode"]})


cli = (
    CLI(name="example-cli", version="7.0.0", description="An example cli to show you the power of cliaid.")
    .settings(unknown_command_allowed=True)
    .usage("tinify <images...> [OPTIONS]")
    .option("dry-run", default=False, help="Does everything compress would do except actually compressing.")
    .option("max-count", "m", "c", default=15, help="The max compressing turns. Default 15.")
    .option("verbose", default=False, help="Show detailed information about the process of compressing.")
    .command("base64", encode,
             usage="tinify base64 <text>",
             help="Output base64-encoded string of the input text.",
             options=[entry("verbose", "V", default=False, help="Show detailed information.")])
    .command("set-key", setkey,
             usage="tinify set-key <key> <mode>",
             help="Set the tinify key.")
)


if __name__ == '__main__':
    outcome = invoke(cli)
    if isinstance(outcome, Idle | UndeclaredFlag):
        pprint(dict(outcome.options))
