#!/usr/bin/env python3
"""
Lex ROS 2 Node
Serves the lex_conversation service by posting robot requests to Amazon Lex
"""

from typing import Any, Optional

import boto3
import rclpy
from rclpy.node import Node
from lex_common_msgs.msg import KeyValue
from lex_common_msgs.srv import AudioTextConversation

from .errors import ErrorCode
from .messages import fill_response_msg, request_from_msg
from .node import LexNode, build_lex_node
from .parameters import ParameterReader
from .runtime import sdk_runtime
from .schemas import AudioTextConversationResponse


class RosParameterReader(ParameterReader):
    """Reads parameters declared on (or overridden for) a ROS 2 node."""

    def __init__(self, node: Node):
        self._node = node

    def get(self, name: str) -> Optional[Any]:
        if not self._node.has_parameter(name):
            return None
        return self._node.get_parameter(name).value


class LexRosNode(Node):
    """
    ROS 2 node for Lex conversations.

    Services:
        - /lex_conversation: post text or audio to the configured bot

    Parameters (dotted, e.g. from a YAML parameter file):
        - lex_configuration.user_id / bot_name / bot_alias / content_type
        - aws_client_configuration.region / connect_timeout_ms / request_timeout_ms
    """

    def __init__(self, session: Optional[boto3.session.Session] = None):
        super().__init__(
            'lex_node',
            automatically_declare_parameters_from_overrides=True,
        )

        self.lex_node = LexNode()
        error_code = build_lex_node(
            self.lex_node,
            RosParameterReader(self),
            separator='.',
            session=session,
        )
        if error_code != ErrorCode.SUCCESS:
            raise RuntimeError(f'Failed to build Lex node: {error_code.value}')

        self.conversation_srv = self.create_service(
            AudioTextConversation,
            'lex_conversation',
            self.lex_conversation_callback,
        )

        self.get_logger().info('Lex node initialized')

    def lex_conversation_callback(self, request, response):
        """Handle a lex_conversation service call."""
        result = AudioTextConversationResponse()
        if self.lex_node.post_content(request_from_msg(request), result):
            fill_response_msg(result, response, KeyValue)
        else:
            self.get_logger().error('Lex PostContent failed')
        return response


def main(args=None):
    rclpy.init(args=args)

    node = None
    try:
        with sdk_runtime() as runtime:
            node = LexRosNode(session=runtime.session)
            rclpy.spin(node)
    except KeyboardInterrupt:
        pass
    finally:
        if node is not None:
            node.destroy_node()
        rclpy.shutdown()


if __name__ == '__main__':
    main()
