from setuptools import setup

setup(
    name = 'ipfixoptsd',
    version = '1.0.0',
    description = 'Collector that decodes IPFIX options templates and '
        'options data',
    packages = [ 'ipfixoptsd_app' ],
    python_requires = '>=3.7',
    install_requires = [
        'python-daemon',
        'python-pidfile',
    ],
    extras_require = {
        'test': [ 'pytest>=7' ],
    },
    entry_points = {
        'console_scripts': [
            'ipfixoptsd = ipfixoptsd_app.main:main',
        ],
    },
)
