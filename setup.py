from setuptools import find_packages, setup
import pathlib as pl
import re

req_line_rgx = re.compile(r'^-r\s+(?P<fname>.+)$')


def this_dir() -> pl.Path:
    return pl.Path(__file__).parent


def requirements_from(fname):
    def resolv_require_line(req):
        match = req_line_rgx.match(req)
        if match:
            return list(requirements_from(match.group('fname')))
        return req

    with open(this_dir().joinpath(fname)) as req_file:
        req_line_iter = (line.strip() for line in req_file)
        requirements = [
            requirement for requirement in req_line_iter
            if requirement and not requirement.startswith('#')
        ]

    for req in requirements:
        resolved_req = resolv_require_line(req)
        if isinstance(resolved_req, list):
            yield from resolved_req
        else:
            yield resolved_req


install_requires = list(requirements_from('requirements.txt'))
test_requires = [
    req for req in requirements_from('requirements.dev.txt')
    if req not in install_requires
]


setup(
    name='starscope',
    version='0.1',
    packages=find_packages(include=['starscope', 'starscope.*']),
    license='MIT',
    long_description=this_dir().joinpath('README.md').read_text(),
    long_description_content_type='text/markdown',
    python_requires='>=3.7',
    entry_points={
        'console_scripts': [
            'starscope = starscope.__main__:cli'
        ]
    },
    install_requires=install_requires,
    extras_require={
        'test': test_requires,
    },
)
