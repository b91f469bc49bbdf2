from glob import glob

from setuptools import setup

package_name = 'lex_node'

setup(
    name=package_name,
    version='1.0.0',
    packages=[package_name],
    data_files=[
        ('share/ament_index/resource_index/packages',
            ['resource/' + package_name]),
        ('share/' + package_name, ['package.xml']),
        ('share/' + package_name + '/launch', glob('launch/*.launch.py')),
        ('share/' + package_name + '/config', glob('config/*.yaml')),
    ],
    python_requires='>=3.9',
    install_requires=[
        'setuptools',
        'boto3>=1.26',
        'pydantic>=2.0',
        'PyYAML>=6.0',
        'opentelemetry-api>=1.20',
        'prometheus-client>=0.17',
    ],
    extras_require={
        'test': ['pytest>=7.0'],
    },
    zip_safe=True,
    maintainer='Jack Amichai',
    maintainer_email='jack@example.com',
    description='Amazon Lex conversation node for ROS 2 robots',
    license='MIT',
    tests_require=['pytest'],
    entry_points={
        'console_scripts': [
            'lex_node = lex_node.ros_node:main',
        ],
    },
)
