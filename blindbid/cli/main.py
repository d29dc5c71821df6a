"""
blindbid CLI - developer tooling for blind bid proofs.

Main entry point for all CLI commands. Scalars are exchanged as hex of their
canonical 32-byte little-endian encoding.
"""

import json
import sys

import click

from blindbid.utils.logger import setup_logging, get_logger

logger = get_logger("cli")


@click.group()
@click.option("--debug", is_flag=True, help="Enable debug logging")
@click.option("--config", "config_path", default=None, type=click.Path(exists=True, dir_okay=False),
              help="JSON config file")
@click.version_option(version="0.1.0")
@click.pass_context
def cli(ctx, debug, config_path):
    """Blind bid proofs - prove and verify sealed-bid scores"""
    from blindbid.core.config import load_config

    cfg = load_config(config_path)
    level = "DEBUG" if debug else cfg.log_level
    setup_logging(level=level, log_dir=str(cfg.log_dir), log_to_file=cfg.log_to_file)

    ctx.ensure_object(dict)
    ctx.obj["config"] = cfg


# =============================================================================
# Demo Command
# =============================================================================


@cli.command("demo")
@click.option("--list-size", default=5, show_default=True, help="Number of other bids in the public list")
@click.option("--amount", default=1000, show_default=True, help="Bid amount")
@click.pass_context
def demo(ctx, list_size, amount):
    """Run an end-to-end prove/verify round with random inputs"""
    from blindbid.crypto import gen_rand_scalar
    from blindbid.core.bid import Bid
    from blindbid.core.prover import BlindBidProver
    from blindbid.core.verifier import BlindBidVerifier

    cfg = ctx.obj["config"]

    click.echo("=" * 60)
    click.echo("  BLIND BID - DEMO")
    click.echo("=" * 60)
    click.echo()

    bid = Bid.generate(amount)
    seed = gen_rand_scalar()
    z = bid.commitment()

    pub_list = [gen_rand_scalar() for _ in range(list_size)]
    pub_list.insert(len(pub_list) // 2, z)
    click.echo(f"  Seed:        {seed.hex()}")
    click.echo(f"  Public list: {len(pub_list)} commitments")
    click.echo()

    output = BlindBidProver(config=cfg).prove(bid.amount, bid.nonce, seed, pub_list)
    click.echo(f"  Score (Q):      {output.score.hex()}")
    click.echo(f"  Commitment (Z): {output.commitment.hex()}")
    click.echo(f"  Proof:          {len(output.proof)} bytes")
    click.echo()

    ok = BlindBidVerifier(config=cfg).verify(
        output.proof,
        seed.to_bytes(),
        output.pub_list,
        output.score.to_bytes(),
        output.commitment.to_bytes(),
    )
    click.echo(f"  Verify: {'valid' if ok else 'INVALID'}")

    if not ok:
        sys.exit(1)


# =============================================================================
# Prove / Verify Commands
# =============================================================================


@cli.command("prove")
@click.argument("request", type=click.File("r"))
@click.option("--out", "-o", type=click.File("w"), default="-", help="Output file (default: stdout)")
@click.pass_context
def prove_cmd(ctx, request, out):
    """Prove a bid from a JSON request {d, k, seed, pub_list}"""
    from blindbid.errors import BlindBidError
    from blindbid.crypto import hex_to_bytes
    from blindbid.core.prover import BlindBidProver
    from blindbid.utils.validation import validate_prove_request

    try:
        data = json.load(request)
    except json.JSONDecodeError as e:
        raise click.ClickException(f"Invalid JSON: {e}")

    valid, err = validate_prove_request(data)
    if not valid:
        raise click.ClickException(err)

    logger.debug(f"Prove request loaded: list_size={len(data['pub_list'])}")

    try:
        output = BlindBidProver(config=ctx.obj["config"]).prove(
            hex_to_bytes(data["d"]),
            hex_to_bytes(data["k"]),
            hex_to_bytes(data["seed"]),
            [hex_to_bytes(item) for item in data["pub_list"]],
        )
    except BlindBidError as e:
        raise click.ClickException(f"{type(e).__name__}: {e}")

    result = {
        "proof": output.proof.hex(),
        "seed": data["seed"],
        "score": output.score.hex(),
        "commitment": output.commitment.hex(),
        "pub_list": [item.hex() for item in output.pub_list],
    }
    out.write(json.dumps(result, indent=2) + "\n")


@cli.command("verify")
@click.argument("claim", type=click.File("r"))
@click.pass_context
def verify_cmd(ctx, claim):
    """Verify a JSON claim {proof, seed, score, commitment, pub_list}"""
    from blindbid.errors import InputShapeError
    from blindbid.crypto import hex_to_bytes
    from blindbid.core.verifier import BlindBidVerifier
    from blindbid.utils.validation import validate_verify_request

    try:
        data = json.load(claim)
    except json.JSONDecodeError as e:
        raise click.ClickException(f"Invalid JSON: {e}")

    valid, err = validate_verify_request(data)
    if not valid:
        raise click.ClickException(err)

    try:
        ok = BlindBidVerifier(config=ctx.obj["config"]).verify(
            hex_to_bytes(data["proof"]),
            hex_to_bytes(data["seed"]),
            [hex_to_bytes(item) for item in data["pub_list"]],
            hex_to_bytes(data["score"]),
            hex_to_bytes(data["commitment"]),
        )
    except InputShapeError as e:
        raise click.ClickException(f"InputShapeError: {e}")

    click.echo("valid" if ok else "invalid")
    if not ok:
        sys.exit(1)


# =============================================================================
# Benchmark Command
# =============================================================================


@cli.command("bench")
@click.option("--iterations", "-n", default=10, show_default=True, help="Iterations per operation")
@click.option("--list-size", default=8, show_default=True, help="Public list length")
def bench(iterations, list_size):
    """Time score, commit, prove and verify"""
    from blindbid.utils.benchmark import benchmark_protocol

    for result in benchmark_protocol(iterations=iterations, list_size=list_size):
        click.echo(f"  {result}")


if __name__ == "__main__":
    cli()
