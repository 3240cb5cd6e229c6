import pytest

rclpy = pytest.importorskip('rclpy')
pytest.importorskip('sensor_msgs.msg')

from rclpy.parameter import Parameter  # noqa: E402

from fake_camera.nodes.camera import main  # noqa: E402
from fake_camera.nodes.camera.fake import FakeCameraNode  # noqa: E402


@pytest.fixture
def ros_context():
    rclpy.init()
    yield
    rclpy.shutdown()


@pytest.fixture
def node(ros_context, color_png):
    node = FakeCameraNode(color_png)
    yield node
    node.destroy_node()


def test_missing_image_argument_exits_nonzero(capsys):
    with pytest.raises(SystemExit) as exc:
        main(['fake_camera'])

    assert exc.value.code == 1
    assert 'Usage' in capsys.readouterr().err


def test_startup_loads_image_and_rate(node):
    assert node.controller.buffer.width == 6
    assert node.controller.image_fields.encoding == 'rgb8'
    assert node.controller.rate_limiter.period == pytest.approx(1 / 30)
    assert node.publish_loop is not None


def test_image_msg_conversion(node):
    message = node.publish_loop.tick()

    msg = node.to_image_msg(message)

    assert (msg.width, msg.height, msg.step) == (6, 4, 18)
    assert msg.encoding == 'rgb8'
    assert msg.is_bigendian == 0
    assert bytes(msg.data) == node.controller.image_fields.data
    assert msg.header.frame_id == 'camera'


def test_set_rate_parameter(node):
    results = node.set_parameters([Parameter('publish_rate_hz', Parameter.Type.DOUBLE, 10.0)])

    assert results[0].successful
    assert node.controller.rate_limiter.period == pytest.approx(0.1)


def test_negative_rate_rejected(node):
    limiter = node.controller.rate_limiter

    results = node.set_parameters([Parameter('publish_rate_hz', Parameter.Type.DOUBLE, -5.0)])

    assert not results[0].successful
    assert node.controller.rate_limiter is limiter
    assert node.get_parameter('publish_rate_hz').value == pytest.approx(30.0)


def test_missing_image_rejected(node, missing_png):
    buffer = node.controller.buffer

    results = node.set_parameters([Parameter('image_path', Parameter.Type.STRING, missing_png)])

    assert not results[0].successful
    assert node.controller.buffer is buffer


def test_swap_image(node, gray_png):
    results = node.set_parameters([Parameter('image_path', Parameter.Type.STRING, gray_png)])

    assert results[0].successful
    assert node.controller.image_fields.encoding == 'mono8'


def test_startup_parameter_is_not_reconfigured(node):
    limiter = node.controller.rate_limiter

    result = node.on_set_parameters([Parameter('topic', Parameter.Type.STRING, 'other')])

    assert result.successful
    assert node.controller.rate_limiter is limiter


@pytest.mark.parametrize('rate', [-5.0, 0.0])
def test_invalid_startup_rate_falls_back_to_default(ros_context, color_png, rate):
    node = FakeCameraNode(
        color_png,
        parameter_overrides=[Parameter('publish_rate_hz', Parameter.Type.DOUBLE, rate)],
    )
    try:
        assert node.controller.rate_limiter.rate_hz == pytest.approx(30.0)
        assert node.get_parameter('publish_rate_hz').value == pytest.approx(30.0)
        assert node.publish_loop.timer is not None
        assert node.controller.buffer.width == 6
    finally:
        node.destroy_node()


def test_integer_rate_accepted(node):
    results = node.set_parameters([Parameter('publish_rate_hz', Parameter.Type.INTEGER, 5)])

    assert results[0].successful
    assert node.controller.rate_limiter.period == pytest.approx(0.2)


def test_stamp_comes_from_node_clock(node):
    message = node.publish_loop.tick()

    msg = node.to_image_msg(message)

    assert msg.header.stamp.sec > 0
    assert msg.header.stamp == message.header.stamp
