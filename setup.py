from setuptools import setup

setup(name='coilcombine',
        version='0.1',
        description='Complex coil combination for multi-echo B0 field mapping',
        author='coilcombine developers',
        packages=['coilcombine'],
        python_requires='>=3.7',
        install_requires=['numpy'],
        extras_require={'test': ['pytest']},
        )
