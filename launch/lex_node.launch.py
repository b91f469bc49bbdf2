"""
Lex Node Launch File
Launches the Lex conversation node with its parameter file
"""

import os
from launch import LaunchDescription
from launch.actions import DeclareLaunchArgument
from launch.substitutions import LaunchConfiguration
from launch_ros.actions import Node
from ament_index_python.packages import get_package_share_directory


def generate_launch_description():
    default_config = os.path.join(
        get_package_share_directory('lex_node'), 'config', 'lex_config.yaml'
    )
    config_file = LaunchConfiguration('config_file', default=default_config)

    return LaunchDescription([
        DeclareLaunchArgument(
            'config_file',
            default_value=default_config,
            description='Lex node parameters file'
        ),

        Node(
            package='lex_node',
            executable='lex_node',
            name='lex_node',
            output='screen',
            parameters=[config_file],
        ),
    ])
