import asyncio
import logging
from typing import Optional

import click
import yaml
from prometheus_client import start_http_server

from .components.config_parser import Parameters, load_config
from .components.logs import configure_logging
from .contract import Artifact, ContractError
from .rpc import ProviderError, RPCQueryProvider
from .scenario import DistributionScenario

configure_logging()
logger = logging.getLogger(__name__)


def load_parameters(configfile: str) -> Parameters:
    with open(configfile, "r") as file:
        config = load_config(file)

    Parameters.verify(config)
    params = Parameters(config)
    params.load_env()

    logger.info("Parameters loaded", {"params": str(params.as_dict())})
    return params


def start_metrics_server(port: int):
    try:
        start_http_server(port)
    except OSError as err:
        logger.error(
            "Could not start the prometheus client",
            {"port": port, "error": f"[Errno {err.args[0]}]: {err.args[1]}"},
        )
    else:
        logger.info("Prometheus client started", {"port": port})


@click.group()
def main():
    pass


@main.command()
@click.option("--configfile", required=True, help="The .yaml configuration file to use")
@click.option("--metrics-port", type=int, default=None, help="Expose prometheus metrics")
@click.option("--dry-run", is_flag=True, help="Print the encoded calls without sending them")
def run(configfile: str, metrics_port: Optional[int], dry_run: bool):
    """
    Register the organizations, set the start time and print the inspected values.
    """
    if not asyncio.run(run_scenario(configfile, metrics_port, dry_run)):
        raise SystemExit(1)


async def run_scenario(configfile: str, metrics_port: Optional[int], dry_run: bool) -> bool:
    try:
        params = load_parameters(configfile)
        artifact = Artifact.load(params.contract.artifact, params.contract.name)
    except (
        OSError,
        yaml.YAMLError,
        KeyError,
        TypeError,
        ValueError,
        AttributeError,
        ContractError,
    ) as err:
        logger.error("Invalid configuration", {"error": str(err)})
        raise click.ClickException(str(err))

    if metrics_port is not None:
        start_metrics_server(metrics_port)

    provider = RPCQueryProvider(params.rpc.url, params.rpc.timeout)
    scenario = DistributionScenario(params, provider, artifact)

    if dry_run:
        try:
            calls = await scenario.plan()
        except (ContractError, ProviderError, ValueError) as err:
            raise click.ClickException(str(err))

        for method, calldata in calls:
            click.echo(f"{method} {calldata}")
        return True

    report = await scenario.run()

    for label, value in report.values:
        click.echo(f"{label} {value}")

    for step in report.steps:
        if step.error:
            click.echo(f"{step.name} {step.status.value}: {step.error}", err=True)

    return report.ok


@main.command(name="generate-config")
def generate_config():
    click.echo(yaml.safe_dump(Parameters.generate(), sort_keys=False))


if __name__ == "__main__":
    main()
