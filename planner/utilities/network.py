import socket

"""Network helper utilities for the Student Planner.

Returns a usable local (LAN) IP address so `planner.main` can tell the user
how to open the planner from a phone on the same network.
"""


def get_local_ip() -> str:
    """Return a non-loopback local IP address if possible, otherwise '127.0.0.1'.

    The UDP socket only asks the OS which interface would be selected to reach
    a public IP; no data is sent on the wire.
    """
    s = socket.socket(socket.AF_INET, socket.SOCK_DGRAM)
    try:
        s.connect(("8.8.8.8", 80))
        ip = str(s.getsockname()[0])
    except OSError:
        ip = "127.0.0.1"
    finally:
        s.close()
    return ip
