import ctypes
import os
import tempfile
from dataclasses import dataclass

from scopedref import ScopedRef, configure_logging, make_scoped_ref, scoped, validity


@validity(lambda conn: conn.fd >= 0)
@dataclass
class Connection:
    """Stand-in for a handle whose null form is fd == -1."""

    fd: int


def close_connection(conn: Connection) -> None:
    print(f"Closing connection on fd {conn.fd}.")


@scoped(os.close)
def open_fd(path: str, flags: int) -> int:
    return os.open(path, flags)


def main() -> None:
    configure_logging("DEBUG")

    with tempfile.TemporaryDirectory() as tmp:
        path = os.path.join(tmp, "example.txt")

        # Early release: the file must be closed before it is read back
        writer = make_scoped_ref(os.close, os.open(path, os.O_WRONLY | os.O_CREAT, 0o600))
        os.write(writer.get(), b"hello from scopedref")
        writer.release()

        with open_fd(path, os.O_RDONLY) as reader:
            print(os.read(reader.get(), 64).decode())

    # Several resources, one cleanup routine, cleanup order = declaration order
    buffer = ctypes.create_string_buffer(32)
    region = ScopedRef(
        lambda ptr, size: print(f"Freeing {size} bytes at {ptr.value:#x}."),
        ctypes.c_void_p(ctypes.addressof(buffer)),
        32,
    )
    print(f"Region live: {bool(region)}")
    region.set(16, index=1)
    moved = region.move()
    print(f"Original released after move: {region.released}")
    moved.release()

    # Validity policy from the decorator
    conn = ScopedRef(close_connection, Connection(fd=-1))
    print(f"Connection live: {bool(conn)}")
    conn.set(Connection(fd=7))
    print(f"Connection live: {bool(conn)}")
    conn.release()

    # Cleanup errors are logged, never raised
    with ScopedRef(os.close, -1):
        pass

    # Handing ownership back
    read_fd, write_fd = ScopedRef(lambda r, w: None, *os.pipe()).steal()
    os.close(read_fd)
    os.close(write_fd)


if __name__ == "__main__":
    main()
