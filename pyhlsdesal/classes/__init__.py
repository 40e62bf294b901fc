from .classes import fit_method, hydrate_structure, class_dic, HLSError, UnknownSpecies, NoReferenceData, InvalidRange, NoFeasiblePoints
