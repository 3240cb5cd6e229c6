import os
from glob import glob

from setuptools import find_packages, setup

package_name = 'fake_camera'

setup(
    name=package_name,
    version='0.1.0',
    packages=find_packages(exclude=['test']),
    data_files=[
        ('share/ament_index/resource_index/packages', ['resource/' + package_name]),
        ('share/' + package_name, ['package.xml']),
        (os.path.join('share', package_name, 'launch'), glob('launch/*.py')),
    ],
    install_requires=['setuptools', 'numpy', 'opencv-python'],
    extras_require={'test': ['pytest']},
    zip_safe=True,
    maintainer='Jin Wei Lim',
    maintainer_email='jin@example.com',
    description='Fake camera driver that republishes a still image with live reconfiguration',
    license='MIT',
    tests_require=['pytest'],
    entry_points={
        'console_scripts': [
            'fake_camera = fake_camera.nodes.camera:main',
        ],
    },
)
