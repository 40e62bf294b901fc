from .hls import lnaw_from_x, x_from_lnaw, delta_t, lnaw_from_delta_t, dt_over_t0t, t_hls, alpha, beta_effective
