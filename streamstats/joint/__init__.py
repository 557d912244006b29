"""Joint moments of multivariate streams: exponent tuples, core configuration and the Core."""