# -----------------------------------------------------------------------------
# i/o helper classes and methods
# 2022 A. Shavykin <0.delameter@gmail.com>
# -----------------------------------------------------------------------------
import re
from math import trunc


class SGRSequence:
    CONTROL_CHARACTER = '\033'
    INTRODUCER = '['
    SEPARATOR = ';'
    TERMINATOR = 'm'

    def __init__(self, *params: int):
        self.params = list(params)

    def __format__(self, format_spec: str) -> str:
        return self.__str__()

    def __str__(self):
        return '{}{}{}{}'.format(self.CONTROL_CHARACTER,
                                 self.INTRODUCER,
                                 self.SEPARATOR.join([str(param) for param in self.params]),
                                 self.TERMINATOR)


class SGRRegistry:
    FMT_RESET = SGRSequence(0)
    FMT_RED = SGRSequence(31)
    FMT_YELLOW = SGRSequence(33)
    FMT_CYAN = SGRSequence(36)


def fmt_sizeof(num, separator=' ', unit='b'):
    # result max length: 8
    # 5 chars for number, 2 chars for unit, 1 for separator (with default options)
    num = max(0, num)
    for unit_idx, unit_prefix in enumerate(['', 'k', 'M', 'G', 'T', 'P', 'E', 'Z']):
        if num >= 1024.0:
            num /= 1024.0
            continue
        if unit_idx == 0:
            num_str = f'{num:5d}'
        else:
            num_str = f'{AutoFloat(num):5f}'
        return f'{num_str}{separator}{unit_prefix}{unit}'

    return f'{num!s}{unit}'


class AutoFloat(float):
    # fixed-length float, decimal digits fill whatever the integer part leaves:
    # f'{AutoFloat(1234.56):4f}'   ->   1235
    # f'{AutoFloat(  12.56):4f}'   ->   12.6
    # f'{AutoFloat(   1.56):4f}'   ->   1.56

    RE_MAX_LEN = re.compile(r'(\d+)f$')
    MAX_DECIMALS_LEN = 2

    def __format__(self, format_spec: str) -> str:
        return super().__format__(self._convert_spec(format_spec))

    def _convert_spec(self, format_spec: str) -> str:
        spec_match = self.RE_MAX_LEN.search(format_spec)
        if not spec_match:
            raise RuntimeError('AutoFloat format should look like "4f"')

        max_len = int(spec_match.group(1))
        integer_len = len(str(trunc(self)))
        decimals_and_point_len = min(self.MAX_DECIMALS_LEN + 1, max_len - integer_len)

        decimals_len = 0
        if decimals_and_point_len >= 2:  # dot without decimals makes no sense
            decimals_len = decimals_and_point_len - 1

        return self.RE_MAX_LEN.sub(f'{max_len}.{decimals_len}f', format_spec)
