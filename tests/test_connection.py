"""Tests for serial connection handling."""

from unittest.mock import MagicMock, patch

import pytest
import serial

from thermalprinter.connection import PortInfo, SerialConnection, list_ports
from thermalprinter.errors import ConnectionError


@pytest.fixture
def mock_serial():
    """A serial.Serial stand-in that starts closed."""
    port = MagicMock(spec=serial.Serial)
    port.port = "/dev/ttyTEST"
    port.is_open = False

    def do_open():
        port.is_open = True

    port.open.side_effect = do_open
    return port


class TestConfigure:
    """Test line settings."""

    def test_sets_8n1_without_flow_control(self, mock_serial):
        conn = SerialConnection(mock_serial)
        conn.configure(19200)

        assert mock_serial.baudrate == 19200
        assert mock_serial.bytesize == serial.EIGHTBITS
        assert mock_serial.parity == serial.PARITY_NONE
        assert mock_serial.stopbits == serial.STOPBITS_ONE
        assert mock_serial.xonxoff is False
        assert mock_serial.rtscts is False
        mock_serial.open.assert_called_once()
        assert conn.is_open

    def test_already_open_not_reopened(self, mock_serial):
        mock_serial.is_open = True
        SerialConnection(mock_serial).configure(9600)
        mock_serial.open.assert_not_called()

    def test_opens_port_by_name(self):
        conn = SerialConnection("/dev/ttyUSB0")
        with patch("thermalprinter.connection.serial.Serial") as serial_cls:
            instance = serial_cls.return_value
            instance.is_open = False
            conn.configure(115200)
        assert instance.port == "/dev/ttyUSB0"
        assert instance.baudrate == 115200
        instance.open.assert_called_once()

    def test_open_failure_raises_connection_error(self, mock_serial):
        mock_serial.open.side_effect = serial.SerialException("no such device")
        with pytest.raises(ConnectionError, match="no such device"):
            SerialConnection(mock_serial).configure(19200)


class TestWrite:
    """Test writes and flushes."""

    def test_write_and_flush(self, mock_serial):
        mock_serial.write.return_value = 2
        conn = SerialConnection(mock_serial)
        conn.configure()
        assert conn.write(b"\x1b@") == 2
        conn.flush()
        mock_serial.write.assert_called_once_with(b"\x1b@")
        mock_serial.flush.assert_called_once()

    def test_write_when_closed_raises(self):
        with pytest.raises(ConnectionError, match="not open"):
            SerialConnection("/dev/ttyUSB0").write(b"x")

    def test_flush_when_closed_raises(self):
        with pytest.raises(ConnectionError, match="not open"):
            SerialConnection("/dev/ttyUSB0").flush()

    def test_write_failure_wrapped(self, mock_serial):
        mock_serial.write.side_effect = serial.SerialException("gone")
        conn = SerialConnection(mock_serial)
        conn.configure()
        with pytest.raises(ConnectionError, match="gone"):
            conn.write(b"x")

    def test_close(self, mock_serial):
        conn = SerialConnection(mock_serial)
        conn.configure()
        conn.close()
        mock_serial.close.assert_called_once()


class TestListPorts:
    """Test port discovery."""

    def test_list_ports_sorted(self):
        fake = [
            MagicMock(device="/dev/ttyUSB1", description="USB Serial", hwid="USB VID:PID=1A86:7523"),
            MagicMock(device="/dev/ttyAMA0", description=None, hwid=None),
        ]
        with patch("thermalprinter.connection.serial_list_ports.comports", return_value=fake):
            ports = list_ports()
        assert [p.device for p in ports] == ["/dev/ttyAMA0", "/dev/ttyUSB1"]
        assert ports[0].description == ""
        assert ports[1].hwid == "USB VID:PID=1A86:7523"

    def test_port_info_str(self):
        info = PortInfo("/dev/ttyUSB0", "CH340", "USB VID:PID=1A86:7523")
        assert str(info) == "/dev/ttyUSB0 - CH340 [USB VID:PID=1A86:7523]"
