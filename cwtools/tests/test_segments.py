"""
"""

import logging

import numpy as np
import pytest

import cwtools
from cwtools import logger, segments
from cwtools.constants import DAY
from cwtools.errors import InvalidArgumentError

T0 = 1000000000.0


def _segment_list():
    starts = T0 + np.array([0.0, 2.0, 5.0]) * DAY
    ends = starts + np.array([1.0, 2.0, 1.0]) * DAY
    return np.array([starts, ends]).T


def test_analyse_segment_list_2col():
    segs = _segment_list()
    props = segments.analyse_segment_list(segs)

    assert props['num_segments'] == 3
    assert np.all(props['start_times'] == segs[:, 0])
    assert np.all(props['end_times'] == segs[:, 1])
    assert np.allclose(props['mid_times'], T0 + np.array([0.5, 3.0, 5.5]) * DAY)
    assert np.isclose(props['mean_time'], np.mean(segs))
    assert np.allclose(props['coh_tspan'], np.array([1.0, 2.0, 1.0]) * DAY)
    assert np.isclose(props['coh_mean_tspan'], 4.0 / 3.0 * DAY)
    assert np.isclose(props['inc_tobs'], 4.0 * DAY)
    assert np.isclose(props['inc_tspan'], 6.0 * DAY)
    assert np.isclose(props['inc_duty'], 4.0 / 6.0)

    for key in ['coh_tobs', 'coh_mean_tobs', 'coh_duty', 'coh_mean_duty']:
        assert key not in props

    return


def test_analyse_segment_list_4col():
    segs = _segment_list()
    tsft = 1800.0
    ndet = 2
    # number of SFTs summed over detectors
    nsfts = np.array([96.0, 144.0, 48.0])
    segs = np.concatenate([segs, np.zeros((3, 1)), nsfts[:, np.newaxis]], axis=1)

    props = segments.analyse_segment_list(segs, ndet=ndet, tsft=tsft)
    coh_tobs = nsfts * tsft / ndet
    assert np.allclose(props['coh_tobs'], coh_tobs)
    assert np.isclose(props['coh_mean_tobs'], np.mean(coh_tobs))
    assert np.allclose(props['coh_duty'], coh_tobs / (np.array([1.0, 2.0, 1.0]) * DAY))
    assert np.isclose(props['coh_mean_duty'], np.mean(props['coh_duty']))
    # default SFT time-span
    props_def = segments.analyse_segment_list(segs, ndet=ndet)
    assert np.allclose(props_def['coh_tobs'], coh_tobs)
    return


def test_analyse_segment_list_summary(tmp_path):
    fname = tmp_path.joinpath("segments.log")
    logger.log_to_file(cwtools.log, logging.INFO, file_name=str(fname))
    fhandler = cwtools.log.handlers[-1]
    try:
        segments.analyse_segment_list(_segment_list())
    finally:
        cwtools.log.removeHandler(fhandler)
        fhandler.close()

    lines = fname.read_text().splitlines()
    order = ["Number of segments", "Start times", "End times", "Mid times", "Mean time",
             "Coherent time spans", "Incoherent observation time"]
    locs = [[ii for ii, ll in enumerate(lines) if f"{key}:" in ll] for key in order]
    assert all(len(ll) == 1 for ll in locs), locs
    locs = [ll[0] for ll in locs]
    assert locs == sorted(locs)

    mid = T0 + np.array([0.5, 5.5]) * DAY
    assert "Mid times: {:.9f} to {:.9f}".format(*mid) in lines[locs[3]]
    return


def test_analyse_segment_list_errors():
    segs = _segment_list()
    with pytest.raises(InvalidArgumentError):
        segments.analyse_segment_list(np.zeros((0, 2)))
    with pytest.raises(InvalidArgumentError):
        segments.analyse_segment_list(segs[:, :1])
    with pytest.raises(InvalidArgumentError):
        segments.analyse_segment_list(np.zeros((3, 3)))

    segs4 = np.concatenate([segs, np.ones((3, 2))], axis=1)
    with pytest.raises(InvalidArgumentError):
        segments.analyse_segment_list(segs4)
    with pytest.raises(InvalidArgumentError):
        segments.analyse_segment_list(segs4, ndet=0)
    with pytest.raises(InvalidArgumentError):
        segments.analyse_segment_list(segs4, ndet=1, tsft=-1800.0)
    return
