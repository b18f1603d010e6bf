"""Sentence builders shared by the test suite."""

from nmea_bridge.nmea.checksum import compute_checksum

# Reference sentences with known-good checksums
RMC_ACTIVE = "$GPRMC,123519,A,4807.038,N,01131.000,E,022.4,084.4,230394,003.1,W*6A"
GGA_FIX = "$GPGGA,123519,4807.038,N,01131.000,E,1,08,0.9,545.4,M,46.9,M,,*47"


def with_checksum(body: str) -> str:
    """Append the ``*hh`` checksum to a ``$``-prefixed sentence body."""
    return f"{body}*{compute_checksum(body[1:]):02X}"


def make_rmc(
    time: str = "123519",
    status: str = "A",
    lat: str = "4807.038",
    ns: str = "N",
    lon: str = "01131.000",
    ew: str = "E",
    speed: str = "022.4",
    course: str = "084.4",
    date: str = "230394",
    talker: str = "GP",
) -> str:
    return with_checksum(
        f"${talker}RMC,{time},{status},{lat},{ns},{lon},{ew},"
        f"{speed},{course},{date},003.1,W"
    )


def make_gga(
    time: str = "123519",
    lat: str = "4807.038",
    ns: str = "N",
    lon: str = "01131.000",
    ew: str = "E",
    quality: str = "1",
    satellites: str = "08",
    hdop: str = "0.9",
    altitude: str = "545.4",
    talker: str = "GP",
) -> str:
    return with_checksum(
        f"${talker}GGA,{time},{lat},{ns},{lon},{ew},{quality},"
        f"{satellites},{hdop},{altitude},M,46.9,M,,"
    )
