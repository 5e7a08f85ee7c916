import click
import colorama as clr


def echo_err(txt: str) -> None:
    click.echo(
        f"{clr.Style.BRIGHT}{clr.Fore.RED}✖{clr.Style.RESET_ALL} {txt}", err=True)
