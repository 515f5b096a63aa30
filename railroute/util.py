from datetime import timedelta
from .errors import InvalidLegError


def clock_to_secs(time):
    """parse a 'HH:MM' or 'HH:MM:SS'
    clock string into seconds since midnight"""
    parts = str(time).strip().split(':')
    if len(parts) == 2:
        parts.append('0')
    if len(parts) != 3:
        raise InvalidLegError('Bad clock time: "{}"'.format(time))
    try:
        h, m, s = (int(p) for p in parts)
    except ValueError:
        raise InvalidLegError('Bad clock time: "{}"'.format(time))
    return s + (m * 60) + (h * 60 * 60)


def secs_to_clock(secs):
    return str(timedelta(seconds=int(secs)))


def format_duration(secs):
    """e.g. 16200 -> '4h30m0s'"""
    secs = int(secs)
    h, rem = divmod(secs, 60*60)
    m, s = divmod(rem, 60)
    return '{}h{}m{}s'.format(h, m, s)
