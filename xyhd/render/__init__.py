from .popcode import PopCodec, GaussianPopCodec, OneDCode, RingCode, TwoDCode
from .channels import Channel, ChannelBuffer, SensorFrame, SensorRenderer

__all__ = [
    "PopCodec", "GaussianPopCodec", "OneDCode", "RingCode", "TwoDCode",
    "Channel", "ChannelBuffer", "SensorFrame", "SensorRenderer",
]
