# -*- coding: utf-8 -*-

#%%
#Basic setup
import time
import numpy as np
from coilcombine import simulation, coils

matrix_size = 128
echo_times = [0.002, 0.0045]
csm = simulation.generate_birdcage_sensitivities(matrix_size)
obj = simulation.generate_disk_object(matrix_size)
fieldmap = np.tile(np.linspace(-50.0, 50.0, matrix_size), (matrix_size, 1))
ydata = simulation.generate_multiecho_data(obj, csm, echo_times, fieldmap)

#%%
#Field map from the phase difference of the two combined echoes
def fieldmap_error(zdata):
    dphase = np.angle(zdata[..., 1] * np.conj(zdata[..., 0]))
    estimate = dphase / (2*np.pi*(echo_times[1] - echo_times[0]))
    return np.max(np.abs(estimate - fieldmap)[obj > 0])

tstart = time.time()
(zdata, sos) = coils.coil_combine(ydata, csm, verbose=True)
print("Sensitivity weighted combination duration: {}s".format(time.time() - tstart))
print("Max field map error: {} Hz".format(fieldmap_error(zdata)))

tstart = time.time()
(zdata2, sos2) = coils.coil_combine(ydata, verbose=True)
print("Self weighted combination duration: {}s".format(time.time() - tstart))
print("Max field map error: {} Hz".format(fieldmap_error(zdata2)))
