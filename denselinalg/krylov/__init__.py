"""Krylov subspace methods: online orthogonalizers (MGS, Householder) and Arnoldi iteration."""