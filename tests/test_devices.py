"""Tests for audio and camera enumeration against fake backends."""
import json
from typing import List, Optional
from unittest.mock import MagicMock, patch

import pytest

from hisendesk.core.errors import DeviceEnumerationError
from hisendesk.devices import (
    AudioBackend,
    CameraBackend,
    LinuxCameraBackend,
    MacCameraBackend,
    NullCameraBackend,
    SoundDeviceBackend,
    WindowsCameraBackend,
    default_camera_backend,
    list_audio_devices,
    list_cameras,
)
from conftest import make_command_result


class FakeAudioBackend(AudioBackend):
    def __init__(self, inputs=None, outputs=None, default_input=None, default_output=None, fail=False):
        self._inputs = inputs or []
        self._outputs = outputs or []
        self._default_input = default_input
        self._default_output = default_output
        self._fail = fail

    def input_devices(self) -> List[str]:
        if self._fail:
            raise DeviceEnumerationError("audio", "driver unavailable")
        return list(self._inputs)

    def output_devices(self) -> List[str]:
        return list(self._outputs)

    def default_input(self) -> Optional[str]:
        return self._default_input

    def default_output(self) -> Optional[str]:
        return self._default_output


class FakeCameraBackend(CameraBackend):
    def __init__(self, names=None, fail=False):
        self._names = names or []
        self._fail = fail

    def camera_names(self) -> List[str]:
        if self._fail:
            raise DeviceEnumerationError("camera", "permission denied")
        return list(self._names)


class TestAudioEnumeration:
    """list_audio_devices with an injected backend."""

    def test_no_inputs_one_output(self):
        backend = FakeAudioBackend(outputs=["MacBook Pro Speakers"], default_output="MacBook Pro Speakers")
        devices = list_audio_devices(backend)
        assert devices.inputs == []
        assert devices.outputs == ["MacBook Pro Speakers"]
        assert devices.default_input is None
        assert devices.default_output == "MacBook Pro Speakers"

    def test_repeated_calls_are_stable(self):
        backend = FakeAudioBackend(inputs=["Mic", "USB Mic"], outputs=["Speakers", "HDMI"])
        assert list_audio_devices(backend) == list_audio_devices(backend)

    def test_duplicate_names_are_kept(self):
        backend = FakeAudioBackend(outputs=["USB Audio", "USB Audio"])
        assert list_audio_devices(backend).outputs == ["USB Audio", "USB Audio"]

    def test_enumeration_failure_propagates(self):
        with pytest.raises(DeviceEnumerationError) as exc_info:
            list_audio_devices(FakeAudioBackend(fail=True))
        assert exc_info.value.kind == "audio"
        assert "driver unavailable" in str(exc_info.value)


class TestCameraEnumeration:
    """list_cameras with an injected backend."""

    def test_lists_names(self):
        assert list_cameras(FakeCameraBackend(["FaceTime HD Camera"])) == ["FaceTime HD Camera"]

    def test_no_cameras(self):
        assert list_cameras(FakeCameraBackend()) == []

    def test_repeated_calls_are_stable(self):
        backend = FakeCameraBackend(["Cam A", "Cam B"])
        assert list_cameras(backend) == list_cameras(backend)

    def test_enumeration_failure_propagates(self):
        with pytest.raises(DeviceEnumerationError):
            list_cameras(FakeCameraBackend(fail=True))


def _fake_sounddevice(devices, default_in=None, default_out=None, hostapi=0):
    """Stand-in for the sounddevice module's query API."""

    class PortAudioError(Exception):
        pass

    sd = MagicMock()
    sd.PortAudioError = PortAudioError
    sd.default.hostapi = hostapi

    def query_devices(device=None, kind=None):
        if kind is None:
            return devices
        default = default_in if kind == "input" else default_out
        if default is None:
            raise PortAudioError("Error querying device -1")
        return default

    sd.query_devices.side_effect = query_devices
    return sd


class TestSoundDeviceBackend:
    """SoundDeviceBackend over a fake sounddevice module."""

    DEVICES = [
        {"name": "Built-in Microphone", "hostapi": 0, "max_input_channels": 2, "max_output_channels": 0},
        {"name": "Built-in Output", "hostapi": 0, "max_input_channels": 0, "max_output_channels": 2},
        {"name": "USB Headset", "hostapi": 0, "max_input_channels": 1, "max_output_channels": 2},
        {"name": "", "hostapi": 0, "max_input_channels": 0, "max_output_channels": 2},
    ]

    def test_lists_only_default_host_api(self):
        devices = [
            {"name": "Microphone (Realtek)", "hostapi": api, "max_input_channels": 2, "max_output_channels": 0}
            for api in (0, 1, 2)
        ] + [{"name": "Speakers (Realtek)", "hostapi": 2, "max_input_channels": 0, "max_output_channels": 2}]
        sd = _fake_sounddevice(devices, hostapi=0)
        with patch("hisendesk.devices.audio._load_sounddevice", return_value=sd):
            backend = SoundDeviceBackend()
            assert backend.input_devices() == ["Microphone (Realtek)"]
            assert backend.output_devices() == []

    def test_each_enumeration_reinitializes_portaudio(self):
        sd = _fake_sounddevice(self.DEVICES)
        with patch("hisendesk.devices.audio._load_sounddevice", return_value=sd):
            backend = SoundDeviceBackend()
            list_audio_devices(backend)
            list_audio_devices(backend)
        assert sd._terminate.call_count == 2
        assert sd._initialize.call_count == 2

    def test_hot_plugged_device_shows_after_refresh(self):
        devices = list(self.DEVICES[:2])
        sd = _fake_sounddevice(devices)
        usb_mic = {"name": "USB Mic", "hostapi": 0, "max_input_channels": 1, "max_output_channels": 0}
        sd._initialize.side_effect = lambda: devices.append(usb_mic) if sd._initialize.call_count == 2 else None
        with patch("hisendesk.devices.audio._load_sounddevice", return_value=sd):
            backend = SoundDeviceBackend()
            assert list_audio_devices(backend).inputs == ["Built-in Microphone"]
            assert list_audio_devices(backend).inputs == ["Built-in Microphone", "USB Mic"]

    def test_reinitialize_failure_raises(self):
        sd = _fake_sounddevice(self.DEVICES)
        sd._initialize.side_effect = sd.PortAudioError("Error initializing PortAudio")
        with patch("hisendesk.devices.audio._load_sounddevice", return_value=sd):
            with pytest.raises(DeviceEnumerationError):
                list_audio_devices(SoundDeviceBackend())

    def test_splits_inputs_and_outputs(self):
        sd = _fake_sounddevice(self.DEVICES, default_in=self.DEVICES[0], default_out=self.DEVICES[1])
        with patch("hisendesk.devices.audio._load_sounddevice", return_value=sd):
            devices = list_audio_devices(SoundDeviceBackend())
        assert devices.inputs == ["Built-in Microphone", "USB Headset"]
        assert devices.outputs == ["Built-in Output", "USB Headset", "Unknown"]
        assert devices.default_input == "Built-in Microphone"
        assert devices.default_output == "Built-in Output"

    def test_no_default_device(self):
        sd = _fake_sounddevice(self.DEVICES[1:2], default_out=self.DEVICES[1])
        with patch("hisendesk.devices.audio._load_sounddevice", return_value=sd):
            devices = list_audio_devices(SoundDeviceBackend())
        assert devices.inputs == []
        assert devices.outputs == ["Built-in Output"]
        assert devices.default_input is None

    def test_query_failure_raises(self):
        sd = _fake_sounddevice([])
        sd.query_devices.side_effect = sd.PortAudioError("PortAudio not initialized")
        with patch("hisendesk.devices.audio._load_sounddevice", return_value=sd):
            with pytest.raises(DeviceEnumerationError):
                SoundDeviceBackend().input_devices()

    def test_missing_portaudio_raises(self):
        with patch("hisendesk.devices.audio._load_sounddevice") as m_load:
            m_load.side_effect = DeviceEnumerationError("audio", "PortAudio library unavailable")
            with pytest.raises(DeviceEnumerationError):
                list_audio_devices(SoundDeviceBackend())


class TestLinuxCameraBackend:
    """V4L2 sysfs discovery."""

    def _add_node(self, root, node, name, index=0):
        (root / node).mkdir(parents=True)
        (root / node / "name").write_text(name + "\n", encoding="utf-8")
        if index is not None:
            (root / node / "index").write_text(f"{index}\n", encoding="utf-8")

    def test_reads_names_in_node_order(self, tmp_path):
        self._add_node(tmp_path, "video10", "Virtual Camera")
        self._add_node(tmp_path, "video0", "Integrated Camera: Integrated C")
        self._add_node(tmp_path, "video1", "Integrated Camera: Integrated C", index=1)
        self._add_node(tmp_path, "video2", "Logitech BRIO")
        self._add_node(tmp_path, "video3", "Logitech BRIO", index=1)
        assert LinuxCameraBackend(tmp_path).camera_names() == [
            "Integrated Camera: Integrated C",
            "Logitech BRIO",
            "Virtual Camera",
        ]

    def test_two_cameras_of_the_same_model(self, tmp_path):
        for node, index in (("video0", 0), ("video1", 1), ("video2", 0), ("video3", 1)):
            self._add_node(tmp_path, node, "Logitech BRIO", index=index)
        assert LinuxCameraBackend(tmp_path).camera_names() == ["Logitech BRIO", "Logitech BRIO"]

    def test_node_without_index_is_listed(self, tmp_path):
        self._add_node(tmp_path, "video0", "Legacy Webcam", index=None)
        assert LinuxCameraBackend(tmp_path).camera_names() == ["Legacy Webcam"]

    def test_missing_sysfs_means_no_cameras(self, tmp_path):
        assert LinuxCameraBackend(tmp_path / "absent").camera_names() == []

    def test_unreadable_node_raises(self, tmp_path):
        (tmp_path / "video0").mkdir()
        with pytest.raises(DeviceEnumerationError):
            LinuxCameraBackend(tmp_path).camera_names()


class TestMacCameraBackend:
    def test_parses_system_profiler(self, fake_executor):
        fake_executor.run_command.return_value = make_command_result(
            stdout=json.dumps({"SPCameraDataType": [{"_name": "FaceTime HD Camera"}, {"_name": "Studio Display Camera"}]})
        )
        assert MacCameraBackend(fake_executor).camera_names() == ["FaceTime HD Camera", "Studio Display Camera"]

    def test_no_cameras_key(self, fake_executor):
        fake_executor.run_command.return_value = make_command_result(stdout="{}")
        assert MacCameraBackend(fake_executor).camera_names() == []

    def test_command_failure_raises(self, fake_executor):
        fake_executor.run_command.return_value = make_command_result(stderr="not permitted", return_code=1)
        with pytest.raises(DeviceEnumerationError, match="not permitted"):
            MacCameraBackend(fake_executor).camera_names()

    def test_bad_output_raises(self, fake_executor):
        fake_executor.run_command.return_value = make_command_result(stdout="<plist>")
        with pytest.raises(DeviceEnumerationError):
            MacCameraBackend(fake_executor).camera_names()


class TestWindowsCameraBackend:
    def test_single_camera_is_bare_string(self, fake_executor):
        fake_executor.run_command.return_value = make_command_result(stdout='"Integrated Webcam"\r\n')
        assert WindowsCameraBackend(fake_executor).camera_names() == ["Integrated Webcam"]

    def test_multiple_cameras(self, fake_executor):
        fake_executor.run_command.return_value = make_command_result(stdout='["Integrated Webcam", "OBS Virtual Camera"]')
        assert WindowsCameraBackend(fake_executor).camera_names() == ["Integrated Webcam", "OBS Virtual Camera"]

    def test_no_output_means_no_cameras(self, fake_executor):
        fake_executor.run_command.return_value = make_command_result(stdout="")
        assert WindowsCameraBackend(fake_executor).camera_names() == []

    def test_powershell_failure_raises(self, fake_executor):
        fake_executor.run_command.return_value = make_command_result(return_code=1)
        with pytest.raises(DeviceEnumerationError):
            WindowsCameraBackend(fake_executor).camera_names()


@pytest.mark.parametrize(
    "os_type, backend_type",
    [
        ("Linux", LinuxCameraBackend),
        ("Darwin", MacCameraBackend),
        ("Windows", WindowsCameraBackend),
        ("FreeBSD", NullCameraBackend),
    ],
)
def test_default_camera_backend(os_type, backend_type):
    with patch("hisendesk.devices.camera.platform.system", return_value=os_type):
        assert isinstance(default_camera_backend(), backend_type)
