import argparse
import logging
import sys

from . import codec, feldman, pedersen, shamir
from .backends import BACKENDS, DEFAULT_BACKEND, get_backend
from .errors import VSSError

SCHEMES = ('shamir', 'feldman', 'pedersen')


def parse_int(value: str) -> int:
    try:
        return int(value, 0)
    except ValueError:
        raise argparse.ArgumentTypeError('{!r} is not a decimal or 0x-prefixed hex integer'.format(value))


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(prog='pyvss', description='Split, combine and verify secret shares')
    parser.add_argument('--backend', choices=sorted(BACKENDS), default=DEFAULT_BACKEND,
                        help='Curve backend (default: %(default)s)')
    parser.add_argument('--log-level', type=int, nargs='?', default=logging.WARNING,
                        help='Logging level (default: %(default)s)')
    parser.add_argument('--log-format', nargs='?', default='%(message)s',
                        help='Logging message format (default: %(default)s)')
    subparsers = parser.add_subparsers(dest='command')
    subparsers.required = True

    split_parser = subparsers.add_parser('split', help='Split a secret into shares')
    split_parser.add_argument('secret', type=parse_int,
                              help='Secret scalar, decimal or 0x-prefixed hex')
    split_parser.add_argument('-t', '--threshold', type=int, required=True,
                              help='Number of shares needed to recover the secret')
    split_parser.add_argument('-n', '--num-shares', type=int, required=True,
                              help='Number of shares to produce, identified 1..n')
    split_parser.add_argument('--scheme', choices=SCHEMES, default='shamir',
                              help='Sharing scheme (default: %(default)s)')

    combine_parser = subparsers.add_parser('combine', help='Recover a secret from hex encoded shares')
    combine_parser.add_argument('shares', nargs='+', help='Hex encoded shares')
    combine_parser.add_argument('-t', '--threshold', type=int,
                                help='Reject fewer shares than this threshold')

    verify_parser = subparsers.add_parser('verify', help='Check a hex encoded share against a verifier')
    verify_parser.add_argument('share', help='Hex encoded share')
    verify_parser.add_argument('--verifier', required=True,
                               help='Hex encoded Feldman verifier, or Pedersen verifier with --blind-share')
    verify_parser.add_argument('--blind-share',
                               help='Hex encoded blinding share; selects Pedersen verification')

    return parser


def run_split(args, backend) -> int:
    if args.scheme == 'shamir':
        shares = shamir.split(args.secret, args.threshold, args.num_shares, backend)
        for share in shares:
            print('share', codec.to_hex(codec.encode_share(share, backend)))
    elif args.scheme == 'feldman':
        shares, verifier = feldman.split(args.secret, args.threshold, args.num_shares, backend)
        for share in shares:
            print('share', codec.to_hex(codec.encode_share(share, backend)))
        print('verifier', codec.to_hex(codec.encode_feldman_verifier(verifier)))
    else:
        result = pedersen.split(args.secret, args.threshold, args.num_shares, backend)
        for share, blind_share in zip(result.secret_shares, result.blind_shares):
            print('share', codec.to_hex(codec.encode_share(share, backend)))
            print('blind-share', codec.to_hex(codec.encode_share(blind_share, backend)))
        print('verifier', codec.to_hex(codec.encode_pedersen_verifier(result.verifier)))
    return 0


def run_combine(args, backend) -> int:
    shares = [codec.decode_share(codec.from_hex(s), backend) for s in args.shares]
    secret = shamir.combine(shares, backend, args.threshold)
    print('{:0{}x}'.format(secret, 2 * backend.scalar_size))
    return 0


def run_verify(args, backend) -> int:
    share = codec.decode_share(codec.from_hex(args.share), backend)
    verifier_bytes = codec.from_hex(args.verifier)

    if args.blind_share is None:
        verifier = codec.decode_feldman_verifier(verifier_bytes, backend)
        valid = verifier.verify(share)
    else:
        blind_share = codec.decode_share(codec.from_hex(args.blind_share), backend)
        verifier = codec.decode_pedersen_verifier(verifier_bytes, backend)
        valid = verifier.verify(share, blind_share)

    print('valid' if valid else 'invalid')
    return 0 if valid else 1


COMMANDS = {
    'split': run_split,
    'combine': run_combine,
    'verify': run_verify,
}


def main(argv=None) -> int:
    parser = build_parser()
    args = parser.parse_args(argv)

    # args parsed; begin getting config stuff
    logging.basicConfig(level=args.log_level, format=args.log_format)

    backend = get_backend(args.backend)
    logging.debug('using backend {}'.format(backend.name))

    try:
        return COMMANDS[args.command](args, backend)
    except VSSError as e:
        parser.exit(2, '{}: error: {}: {}\n'.format(parser.prog, e.__class__.__name__, e))


if __name__ == '__main__':
    sys.exit(main())
