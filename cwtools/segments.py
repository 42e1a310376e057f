"""Segment lists of semi-coherent searches.

A segment list has one row per coherent segment, with either two columns ``[start, end]``, or four
columns ``[start, end, (unused), num_sfts]`` where ``num_sfts`` is the number of short Fourier
transforms (SFTs) in the segment summed over all detectors.  Times are GPS seconds.

"""

import numpy as np

from cwtools import log, utils
from cwtools.constants import DAY, TSFT_DEFAULT
from cwtools.errors import InvalidArgumentError


def analyse_segment_list(segment_list, ndet=None, tsft=TSFT_DEFAULT):
    """Compute properties of a segment list.

    Parameters
    ----------
    segment_list : (S, 2) or (S, 4) array_like
        Segment list, see the module docstring.
    ndet : int or `None`
        Number of detectors, required (positive) for 4-column segment lists.
    tsft : float
        SFT time-span [s], used for 4-column segment lists.

    Returns
    -------
    props : dict
        Properties of the segment list:

        * 'num_segments' : number of segments
        * 'start_times', 'end_times', 'mid_times' : (S,) times of each segment [s]
        * 'mean_time' : mean of all start and end times [s]
        * 'coh_tspan', 'coh_mean_tspan' : (S,) time-span of each segment, and its mean [s]
        * 'inc_tobs' : total observation time of all segments [s]
        * 'inc_tspan' : total time-span from first start to last end [s]
        * 'inc_duty' : incoherent duty cycle, ``inc_tobs / inc_tspan``

        4-column segment lists also include:

        * 'coh_tobs', 'coh_mean_tobs' : (S,) observation time of each segment, and its mean [s]
        * 'coh_duty', 'coh_mean_duty' : (S,) duty cycle of each segment, and its mean

    """
    segs = np.asarray(segment_list, dtype=float)
    if (segs.ndim != 2) or (segs.shape[0] == 0):
        msg = f"Segment list must be a non-empty 2D array, got shape {segs.shape}!"
        log.error(msg)
        raise InvalidArgumentError(msg)

    ncols = segs.shape[1]
    if ncols not in [2, 4]:
        msg = f"Segment list must have either 2 or 4 columns, got {ncols}!"
        log.error(msg)
        raise InvalidArgumentError(msg)

    have_sfts = (ncols == 4)
    if have_sfts:
        if (ndet is None) or (not np.isscalar(ndet)) or (ndet <= 0):
            msg = f"`ndet` must be a positive scalar for 4-column segment lists, got {ndet}!"
            log.error(msg)
            raise InvalidArgumentError(msg)
        if (not np.isscalar(tsft)) or (tsft <= 0):
            msg = f"`tsft` must be a positive scalar, got {tsft}!"
            log.error(msg)
            raise InvalidArgumentError(msg)

    ts = segs[:, 0]
    te = segs[:, 1]

    props = dict()
    props['num_segments'] = ts.size
    props['start_times'] = ts
    props['end_times'] = te
    props['mid_times'] = 0.5 * (ts + te)
    props['mean_time'] = np.mean(np.concatenate([ts, te]))
    if have_sfts:
        props['coh_tobs'] = segs[:, 3] * tsft / ndet
        props['coh_mean_tobs'] = np.mean(props['coh_tobs'])
    props['coh_tspan'] = te - ts
    props['coh_mean_tspan'] = np.mean(props['coh_tspan'])
    if have_sfts:
        props['coh_duty'] = props['coh_tobs'] / props['coh_tspan']
        props['coh_mean_duty'] = np.mean(props['coh_duty'])
    props['inc_tobs'] = np.sum(te - ts)
    props['inc_tspan'] = np.max(te) - np.min(ts)
    props['inc_duty'] = props['inc_tobs'] / props['inc_tspan']

    # ---- Log summary
    log.info(f"Number of segments: {props['num_segments']}")
    log.info("Start times: {:.9f} to {:.9f}".format(*utils.minmax(ts)))
    log.info("End times: {:.9f} to {:.9f}".format(*utils.minmax(te)))
    log.info("Mid times: {:.9f} to {:.9f}".format(*utils.minmax(props['mid_times'])))
    log.info(f"Mean time: {props['mean_time']:.9f}")
    if have_sfts:
        log.info("Coherent observation times: {:.3f} to {:.3f} days".format(*(utils.minmax(props['coh_tobs'])/DAY)))
    log.info("Coherent time spans: {:.3f} to {:.3f} days".format(*(utils.minmax(props['coh_tspan'])/DAY)))
    if have_sfts:
        log.info("Coherent duty cycles: {:.3f} to {:.3f}".format(*utils.minmax(props['coh_duty'])))
    log.info(f"Incoherent observation time: {props['inc_tobs']/DAY:.3f} days")
    log.info(f"Incoherent time span: {props['inc_tspan']/DAY:.3f} days")
    log.info(f"Incoherent duty cycle: {props['inc_duty']:.3f}")

    return props
