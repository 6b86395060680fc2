import argparse, sys, time

from .audit import configure_logging, log_event
from .config import load_settings
from .errors import MrPrimeError
from .primes import (
    generate_prime, generate_safe_prime, miller_rabin, rounds_for_bits,
)
from .witnesses import deterministic_witnesses


def _parse_n(text):
    try:
        return int(text)
    except ValueError:
        pass
    try:
        return int(text, 0)
    except ValueError:
        raise argparse.ArgumentTypeError(f"not an integer: {text!r}")


def cmd_test(args, settings):
    k = args.rounds or settings.default_rounds
    verdict = miller_rabin(args.n, k)
    bases = deterministic_witnesses(args.n)
    mode = "deterministic" if bases is not None else f"random, k={k}"
    label = "probably prime" if verdict else "composite"
    if verdict and bases is not None:
        label = "prime"
    print(f"{args.n}: {label} ({mode})")
    log_event("test", f"bits={args.n.bit_length()}", f"verdict={verdict}")


def _rounds(args, settings):
    if args.rounds:
        return args.rounds
    return max(settings.keygen_rounds, rounds_for_bits(args.bits, args.err))


def cmd_genprime(args, settings):
    k = _rounds(args, settings)
    t0 = time.time()
    p = generate_prime(args.bits, k)
    dt = time.time() - t0
    print(f"Prime ({args.bits} bits) found in {dt:.2f}s with MR rounds={k}:\n{p}\n")
    print(f"Check: bit_length={p.bit_length()}  MR({k})={miller_rabin(p, k)}")
    log_event("genprime", f"bits={args.bits}", f"rounds={k} time={dt:.3f}s")


def cmd_safeprime(args, settings):
    k = _rounds(args, settings)
    p = generate_safe_prime(args.bits, k)
    print(f"safe prime p=2q+1 (bits={p.bit_length()}), MR rounds={k}\n{p}")
    log_event("safeprime", f"bits={args.bits}", f"rounds={k}")


def cmd_bench(args, settings):
    k = _rounds(args, settings)
    t0 = time.time()
    for _ in range(args.count):
        _ = generate_prime(args.bits, k)
    dt = time.time() - t0
    print(f"Generated {args.count} primes of {args.bits} bits in {dt:.2f}s  -> {dt/args.count:.2f}s/prime")


def _positive(text):
    value = int(text)
    if value < 1:
        raise argparse.ArgumentTypeError(f"must be >= 1, got {value}")
    return value


def build_parser():
    ap = argparse.ArgumentParser(prog="mrprime", description="Miller–Rabin primality testing and prime generation")
    ap.add_argument("--log-level", default=None, choices=["DEBUG", "INFO", "WARNING", "ERROR"])
    sub = ap.add_subparsers(dest="cmd", required=True)

    ap_test = sub.add_parser("test", help="Test an integer for primality")
    ap_test.add_argument("n", type=_parse_n, help="integer to test (decimal, or 0x/0o/0b prefixed)")
    ap_test.add_argument("--rounds", type=_positive, default=None, help="random witnesses above the deterministic range")
    ap_test.set_defaults(func=cmd_test)

    def add_gen_args(p, count=False):
        p.add_argument("--bits", type=int, default=1024, help="Bit length of prime (default: 1024)")
        p.add_argument("--err", type=int, default=128, help="Target error in bits for MR (default: 128)")
        p.add_argument("--rounds", type=_positive, default=None, help="explicit MR rounds (overrides --err)")
        if count:
            p.add_argument("--count", type=_positive, default=3)

    ap_gen = sub.add_parser("genprime", help="Generate a probable prime")
    add_gen_args(ap_gen)
    ap_gen.set_defaults(func=cmd_genprime)

    ap_sp = sub.add_parser("safeprime", help="Generate a safe prime p=2q+1")
    add_gen_args(ap_sp)
    ap_sp.set_defaults(func=cmd_safeprime)

    ap_b = sub.add_parser("bench", help="Benchmark prime generation")
    add_gen_args(ap_b, count=True)
    ap_b.set_defaults(func=cmd_bench)
    return ap


def main(argv=None):
    ap = build_parser()
    args = ap.parse_args(argv)
    try:
        settings = load_settings()
        configure_logging(args.log_level or settings.log_level)
        args.func(args, settings)
    except MrPrimeError as e:
        print(f"mrprime: error: {e}", file=sys.stderr)
        return 2
    return 0


if __name__ == "__main__":
    sys.exit(main())
